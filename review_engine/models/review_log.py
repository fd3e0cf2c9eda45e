from sqlalchemy import Column, Integer, String
from review_engine.database import Base

class ReviewLog(Base):
    """Number of reviews answered per calendar day"""
    __tablename__ = "review_log"

    review_date = Column(String, primary_key=True)  # YYYY-MM-DD
    count = Column(Integer, nullable=False, default=0)
