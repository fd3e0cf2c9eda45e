from sqlalchemy.orm import Session
from review_engine.models import ReviewLog
from datetime import date
from typing import Dict

def increment_review_count(db: Session, review_date: date) -> int:
    """Add one review to the given day and return the day's total"""
    key = review_date.strftime("%Y-%m-%d")
    entry = db.query(ReviewLog).filter(ReviewLog.review_date == key).first()
    if not entry:
        entry = ReviewLog(review_date=key, count=0)
        db.add(entry)
    entry.count += 1
    db.commit()
    return entry.count

def get_review_history(db: Session) -> Dict[str, int]:
    """Get review counts keyed by YYYY-MM-DD"""
    return {entry.review_date: entry.count for entry in db.query(ReviewLog).all()}
