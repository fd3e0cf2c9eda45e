import logging
from sqlalchemy.orm import Session
from review_engine.models import ItemProgress
from review_engine.schemas import SchedulingRecord
from review_engine.sm2 import SM2Algorithm, now_millis
from review_engine.stats import clear_weak_status, record_session_accuracy
from review_engine.crud.review_log import increment_review_count
from datetime import datetime
from typing import Dict, Optional

logger = logging.getLogger(__name__)

def _to_record(row: ItemProgress) -> SchedulingRecord:
    return SchedulingRecord(
        item_id=row.item_id,
        next_review=row.next_review,
        interval=row.interval,
        repetition=row.repetition,
        easiness_factor=row.easiness_factor,
        status=row.status,
        correct_count=row.correct_count,
        miss_count=row.miss_count,
        last_reviewed=row.last_reviewed,
        session_correct=row.session_correct,
        session_miss=row.session_miss
    )

def get_progress(db: Session, item_id: str) -> Optional[SchedulingRecord]:
    """Get the scheduling record of one item, None if never reviewed"""
    row = db.query(ItemProgress).filter(ItemProgress.item_id == item_id).first()
    return _to_record(row) if row else None

def get_progress_map(db: Session) -> Dict[str, SchedulingRecord]:
    """Get all scheduling records keyed by item id"""
    rows = db.query(ItemProgress).order_by(ItemProgress.item_id).all()
    return {row.item_id: _to_record(row) for row in rows}

def save_progress(db: Session, record: SchedulingRecord) -> SchedulingRecord:
    """Insert or replace the stored record of an item"""
    row = db.query(ItemProgress).filter(ItemProgress.item_id == record.item_id).first()
    if not row:
        row = ItemProgress(item_id=record.item_id)
        db.add(row)
    for key, value in record.model_dump().items():
        setattr(row, key, value)
    db.commit()
    logger.info(f"Saved progress for '{record.item_id}' (next review in {record.interval} days)")
    return record

def apply_review(db: Session, item_id: str, quality: int, now_ms: int = None) -> SchedulingRecord:
    """
    Run one review through the scheduler and persist the result.

    Also counts the review in the per-day review log.
    """
    now = now_ms if now_ms is not None else now_millis()
    record = SM2Algorithm.calculate_review(item_id, get_progress(db, item_id), quality, now_ms=now)
    save_progress(db, record)
    increment_review_count(db, datetime.fromtimestamp(now / 1000).date())
    return record

def clear_weak_item(db: Session, item_id: str) -> Optional[SchedulingRecord]:
    """Reset the miss counter of an item so it no longer shows as weak"""
    record = get_progress(db, item_id)
    if record:
        record = save_progress(db, clear_weak_status(record))
    return record

def record_item_accuracy(db: Session, item_id: str, correct: bool) -> Optional[SchedulingRecord]:
    """Count a daily/simulation session answer for an already reviewed item"""
    record = get_progress(db, item_id)
    if record:
        record = save_progress(db, record_session_accuracy(record, correct))
    return record
