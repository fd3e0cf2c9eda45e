from sqlalchemy import Column, Integer, BigInteger, String, Float, DateTime
from datetime import datetime
from review_engine.database import Base

class ItemProgress(Base):
    """SM-2 scheduling state per learnable item"""
    __tablename__ = "item_progress"

    item_id = Column(String, primary_key=True, index=True)

    # SM-2 algorithm fields
    next_review = Column(BigInteger, nullable=False, index=True)  # ms since epoch
    interval = Column(Integer, nullable=False)  # days until next review
    repetition = Column(Integer, nullable=False)  # consecutive successful reviews
    easiness_factor = Column(Float, nullable=False)
    status = Column(String, nullable=False)  # learning, review, graduated

    correct_count = Column(Integer, nullable=False, default=0)
    miss_count = Column(Integer, nullable=False, default=0)
    last_reviewed = Column(BigInteger, nullable=False)  # ms since epoch

    # Daily/simulation session accuracy, independent of the lifetime counters
    session_correct = Column(Integer)
    session_miss = Column(Integer)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
