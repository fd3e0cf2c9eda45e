import typer
import json
import logging
from rich.console import Console
from rich.table import Table
from rich.logging import RichHandler
from typing import Optional
from datetime import datetime, date
from pydantic import ValidationError

from review_engine.config import settings
from review_engine.database import SessionLocal, init_db
from review_engine.crud import (
    apply_review, get_progress_map, clear_weak_item,
    add_catalog_items, get_catalog, get_catalog_item, get_review_history
)
from review_engine.schemas import ReviewSubmission, CatalogItemSchema
from review_engine.catalog_parser import CatalogParser
from review_engine.sm2 import SM2Algorithm, now_millis
from review_engine.session import build_practice_session, build_level_run
from review_engine.stats import summarize_progress, review_history_window

app = typer.Typer(help="Review Engine CLI - SM-2 spaced repetition for kanji and vocabulary")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs")):
    """Configure logging for every command"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def _format_ts(ts_ms: int) -> str:
    return datetime.fromtimestamp(ts_ms / 1000).strftime("%Y-%m-%d %H:%M")


def _item_label(item: Optional[CatalogItemSchema], item_id: str) -> str:
    return f"{item.char} ({item.meaning})" if item else item_id


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")


@app.command()
def reset_db():
    """Delete all progress and catalog data (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    from review_engine.database import engine, Base
    import review_engine.models  # noqa: F401
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")


@app.command()
def import_catalog(
    file_path: Optional[str] = typer.Argument(None, help="Catalog file (.csv or .xlsx). Default: CATALOG_PATH")
):
    """Import learnable items from a catalog table"""
    path = file_path or settings.catalog_path
    if not path:
        console.print("[red]✗[/red] No catalog file given and CATALOG_PATH is not set")
        return

    db = SessionLocal()
    try:
        console.print("[yellow]Parsing catalog...[/yellow]")
        raw_items = CatalogParser.auto_parse(path)

        items = []
        for raw in raw_items:
            try:
                items.append(CatalogItemSchema(**raw))
            except ValidationError as e:
                console.print(f"[red]Skipping {raw.get('id', '?')}: {e.errors()[0]['msg']}[/red]")

        count = add_catalog_items(db, items)
        console.print(f"[green]✓[/green] Imported {count} catalog items from {path}")
    except ValueError as e:
        console.print(f"[red]✗[/red] Error: {str(e)}")
    finally:
        db.close()


@app.command()
def review(
    item_id: str = typer.Option(..., prompt="Item ID"),
    quality: int = typer.Option(..., prompt="Quality (0-5)")
):
    """Record the answer to one item and reschedule it"""
    try:
        submission = ReviewSubmission(item_id=item_id, quality=quality)
    except ValidationError:
        console.print("[red]✗[/red] Quality rating must be between 0 and 5")
        raise typer.Exit(code=1)

    db = SessionLocal()
    try:
        record = apply_review(db, submission.item_id, submission.quality)
        item = get_catalog_item(db, record.item_id)

        console.print("[green]✓[/green] Review recorded!")
        console.print(f"  Item: {_item_label(item, record.item_id)}")
        console.print(f"  Quality: {submission.quality}/5")
        console.print(f"  Status: {record.status}")
        console.print(f"  Next review: {_format_ts(record.next_review)} (in {record.interval} days)")
        console.print(f"  Easiness: {record.easiness_factor:.2f}")
    finally:
        db.close()


@app.command()
def due():
    """List items due for review"""
    db = SessionLocal()
    try:
        now = now_millis()
        due_items = SM2Algorithm.get_due_items(get_progress_map(db), now_ms=now)
        if not due_items:
            console.print("[green]Nothing due. All caught up![/green]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Item", style="cyan")
        table.add_column("Status", style="green")
        table.add_column("Due", style="yellow")
        table.add_column("Days Overdue", style="red")

        for record in sorted(due_items, key=lambda r: r.next_review):
            overdue = SM2Algorithm.days_overdue(record, now_ms=now)
            table.add_row(
                _item_label(get_catalog_item(db, record.item_id), record.item_id),
                record.status,
                _format_ts(record.next_review),
                str(overdue) if overdue > 0 else "Today"
            )

        console.print(table)
        console.print(f"[dim]{len(due_items)} items due[/dim]")
    finally:
        db.close()


@app.command()
def session(
    size: int = typer.Option(None, help="Session size. Default: SESSION_SIZE")
):
    """Show the items of the next practice session"""
    db = SessionLocal()
    try:
        records = get_progress_map(db)
        catalog = get_catalog(db)
        item_ids = build_practice_session(
            records,
            [item.id for item in catalog],
            size=size if size is not None else settings.session_size
        )
        if not item_ids:
            console.print("[yellow]No items available. Import a catalog first.[/yellow]")
            return

        catalog_by_id = {item.id: item for item in catalog}
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("#", justify="right")
        table.add_column("Item", style="cyan")
        table.add_column("Kind", style="yellow")

        for i, item_id in enumerate(item_ids, 1):
            record = records.get(item_id)
            if record is None:
                kind = "[NEW]"
            elif SM2Algorithm.is_due(record):
                kind = "[DUE]"
            else:
                kind = "[REV]"
            table.add_row(str(i), _item_label(catalog_by_id.get(item_id), item_id), kind)

        console.print(table)
    finally:
        db.close()


@app.command()
def level_run(
    level: str = typer.Argument(..., help="Level to drill, e.g. N5"),
    size: int = typer.Option(None, help="Number of items. Default: LEVEL_RUN_SIZE")
):
    """Pick random items of one level for a timed run"""
    db = SessionLocal()
    try:
        catalog = get_catalog(db, level=level)
        item_ids = build_level_run(catalog, level, size=size if size is not None else settings.level_run_size)
        if not item_ids:
            console.print(f"[yellow]No items found for level {level}[/yellow]")
            return

        catalog_by_id = {item.id: item for item in catalog}
        console.print(f"\n[bold]{level} run - {len(item_ids)} items[/bold]")
        for i, item_id in enumerate(item_ids, 1):
            console.print(f"  {i}. {_item_label(catalog_by_id.get(item_id), item_id)}")
    finally:
        db.close()


@app.command()
def stats():
    """View learning progress"""
    db = SessionLocal()
    try:
        records = get_progress_map(db)
        summary = summarize_progress(
            records,
            total_items=len(get_catalog(db)),
            weak_threshold=settings.weak_miss_threshold,
            weak_limit=settings.weak_item_limit
        )

        console.print("\n[bold]Learning Progress[/bold]\n")
        console.print("[cyan]Statistics:[/cyan]")
        console.print(f"  Learned: {summary.learned_count}/{summary.total_items}")
        console.print(f"  Graduated: {summary.graduated_count}")
        console.print(f"  Due now: {summary.due_count}")
        console.print(f"  Accuracy: {summary.accuracy}%")

        console.print("\n[cyan]Reviews (last 7 days):[/cyan]")
        for day, count in review_history_window(get_review_history(db), date.today()):
            console.print(f"  {day}  {'█' * min(count, 40)} {count}")

        if summary.weak_items:
            console.print("\n[yellow]Weak Items:[/yellow]")
            table = Table(show_header=True, header_style="bold magenta")
            table.add_column("Item", style="cyan")
            table.add_column("Misses", style="red", justify="right")
            table.add_column("Correct", style="green", justify="right")
            for record in summary.weak_items:
                table.add_row(
                    _item_label(get_catalog_item(db, record.item_id), record.item_id),
                    str(record.miss_count),
                    str(record.correct_count)
                )
            console.print(table)
        else:
            console.print("\n[green]No weak items detected.[/green]")
    finally:
        db.close()


@app.command()
def clear_weak(item_id: str):
    """Clear the weak status (miss count) of an item"""
    db = SessionLocal()
    try:
        record = clear_weak_item(db, item_id)
        if record:
            console.print(f"[green]✓[/green] Cleared weak status of {item_id}")
        else:
            console.print(f"[red]✗[/red] Item {item_id} has no review history")
    finally:
        db.close()


@app.command()
def export(
    output: Optional[str] = typer.Option(None, help="Write JSON to this file instead of stdout")
):
    """Export all scheduling records as JSON"""
    db = SessionLocal()
    try:
        data = {
            item_id: record.model_dump(by_alias=True)
            for item_id, record in get_progress_map(db).items()
        }
        text = json.dumps(data, indent=2, ensure_ascii=False)
        if output:
            with open(output, "w", encoding="utf-8") as f:
                f.write(text)
            console.print(f"[green]✓[/green] Exported {len(data)} records to {output}")
        else:
            typer.echo(text)
    finally:
        db.close()


if __name__ == "__main__":
    app()
