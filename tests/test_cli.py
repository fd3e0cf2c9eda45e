import json

import pytest
from typer.testing import CliRunner

import cli
from review_engine.crud import add_catalog_items, apply_review, get_progress
from review_engine.schemas import CatalogItemSchema

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_db(monkeypatch, session_factory):
    monkeypatch.setattr(cli, "SessionLocal", session_factory)
    return session_factory


def test_review_records_answer(db):
    result = runner.invoke(cli.app, ["review", "--item-id", "n5-1", "--quality", "5"])

    assert result.exit_code == 0
    assert "Review recorded" in result.output
    assert get_progress(db, "n5-1").status == "graduated"


def test_review_rejects_out_of_range_quality(db):
    result = runner.invoke(cli.app, ["review", "--item-id", "n5-1", "--quality", "9"])

    assert result.exit_code == 1
    assert "between 0 and 5" in result.output
    assert get_progress(db, "n5-1") is None


def test_due_with_nothing_reviewed():
    result = runner.invoke(cli.app, ["due"])

    assert result.exit_code == 0
    assert "Nothing due" in result.output


def test_session_lists_new_items(db):
    add_catalog_items(db, [
        CatalogItemSchema(id="n5-1", char="日", meaning="sun", level="N5"),
        CatalogItemSchema(id="n5-2", char="月", meaning="moon", level="N5"),
    ])

    result = runner.invoke(cli.app, ["session", "--size", "5"])

    assert result.exit_code == 0
    assert "[NEW]" in result.output
    assert "moon" in result.output


def test_import_catalog(tmp_path, db):
    path = tmp_path / "kanji.csv"
    path.write_text("id,char,meaning,level\nn5-1,日,sun,N5\n", encoding="utf-8")

    result = runner.invoke(cli.app, ["import-catalog", str(path)])

    assert result.exit_code == 0
    assert "Imported 1 catalog items" in result.output


def test_stats_shows_weak_items(db):
    add_catalog_items(db, [CatalogItemSchema(id="n5-1", char="日", meaning="sun", level="N5")])
    for _ in range(3):
        apply_review(db, "n5-1", 1)

    result = runner.invoke(cli.app, ["stats"])

    assert result.exit_code == 0
    assert "Weak Items" in result.output
    assert "Accuracy: 0%" in result.output


def test_clear_weak(db):
    apply_review(db, "n5-1", 0)

    result = runner.invoke(cli.app, ["clear-weak", "n5-1"])

    assert result.exit_code == 0
    assert get_progress(db, "n5-1").miss_count == 0


def test_export_uses_camel_case(db, now):
    apply_review(db, "n5-1", 4, now_ms=now)

    result = runner.invoke(cli.app, ["export"])

    data = json.loads(result.output)
    assert data["n5-1"]["itemId"] == "n5-1"
    assert data["n5-1"]["easinessFactor"] == pytest.approx(2.5)
    assert data["n5-1"]["nextReview"] == now + 86_400_000
