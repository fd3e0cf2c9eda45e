"""SM-2 review scheduling engine for character and vocabulary items"""

from review_engine.schemas import SchedulingRecord
from review_engine.sm2 import SM2Algorithm, calculate_review, get_due_items

__all__ = [
    "SchedulingRecord",
    "SM2Algorithm",
    "calculate_review",
    "get_due_items"
]
