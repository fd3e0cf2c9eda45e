from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

ReviewStatus = Literal["new", "learning", "review", "graduated"]

class SchedulingRecord(BaseModel):
    """
    Spaced-repetition state of one learnable item.

    Instances are immutable: the scheduler returns a fresh record for every
    review, and caller-owned adjustments go through model_copy(update=...).
    Serialized with camelCase keys (itemId, nextReview, easinessFactor, ...).
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    item_id: str
    next_review: int  # ms since epoch
    interval: int  # days
    repetition: int
    easiness_factor: float
    status: ReviewStatus
    correct_count: int
    miss_count: int
    last_reviewed: int  # ms since epoch

    # Accuracy counters for daily/simulation sessions, maintained by the caller
    session_correct: Optional[int] = None
    session_miss: Optional[int] = None

class ReviewSubmission(BaseModel):
    """Schema for a review answer coming from the command line or another caller"""
    item_id: str = Field(min_length=1)
    quality: int = Field(ge=0, le=5, description="5=perfect, 3=correct with difficulty, 0=blackout")

class CatalogItemSchema(BaseModel):
    """Schema for one learnable item of the catalog"""
    id: str
    char: str
    meaning: str = ""
    onyomi: List[str] = Field(default_factory=list)
    kunyomi: List[str] = Field(default_factory=list)
    level: Optional[str] = None

    class Config:
        from_attributes = True

class ProgressStats(BaseModel):
    """Dashboard summary of a progress map"""
    total_items: int
    learned_count: int
    graduated_count: int
    due_count: int
    accuracy: int  # percent
    weak_items: List[SchedulingRecord]
