import logging
import math
import time
from typing import List, Mapping, Optional

from review_engine.schemas import SchedulingRecord

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000
INITIAL_EASINESS = 2.5
MIN_EASINESS = 1.3


def now_millis() -> int:
    """Current wall-clock time in milliseconds since epoch"""
    return int(time.time() * 1000)


def round_half_up(value: float) -> int:
    # 12.5 -> 13; the builtin round() would give 12
    return int(math.floor(value + 0.5))


class SM2Algorithm:
    """
    SM-2 spaced repetition algorithm for scheduling item reviews.
    Based on SuperMemo 2 algorithm by Piotr Wozniak, simplified so that a
    lapse always restarts the item at a one-day interval.
    """

    @staticmethod
    def calculate_review(
        item_id: str,
        progress: Optional[SchedulingRecord],
        quality: int,
        now_ms: int = None  # Optional: injected clock instead of wall time
    ) -> SchedulingRecord:
        """
        Calculate the next scheduling record after one review.

        Args:
            item_id: Identifier of the reviewed item
            progress: Current record, or None if the item was never reviewed
            quality: Response quality (0-5).
                5=perfect, 4=correct after hesitation, 3=correct with serious difficulty,
                2=incorrect but seemed easy, 1=incorrect but remembered, 0=total blackout.
                Not range-checked; callers validate before calling.
            now_ms: Review timestamp in ms since epoch (defaults to now)

        Returns:
            A new SchedulingRecord replacing the previous one
        """
        now = now_ms if now_ms is not None else now_millis()

        if progress is not None:
            current_interval = progress.interval
            current_repetition = progress.repetition
            current_ef = progress.easiness_factor
            correct_count = progress.correct_count
            miss_count = progress.miss_count
            session_correct = progress.session_correct or 0
            session_miss = progress.session_miss or 0
        else:
            current_interval = 0
            current_repetition = 0
            current_ef = INITIAL_EASINESS
            correct_count = 0
            miss_count = 0
            session_correct = 0
            session_miss = 0

        # Lifetime outcome counters
        if quality >= 3:
            correct_count += 1
        else:
            miss_count += 1

        if quality >= 3:
            if current_repetition == 0:
                new_interval = 1
            elif current_repetition == 1:
                new_interval = 6
            else:
                new_interval = round_half_up(current_interval * current_ef)
            new_repetition = current_repetition + 1
        else:
            # Lapse: start over regardless of how long the interval was
            new_interval = 1
            new_repetition = 0

        # EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
        new_ef = current_ef + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
        if new_ef < MIN_EASINESS:
            new_ef = MIN_EASINESS

        logger.debug(
            f"Reviewed '{item_id}' q={quality}: interval {current_interval}->{new_interval}, "
            f"rep {current_repetition}->{new_repetition}, EF {current_ef:.2f}->{new_ef:.2f}"
        )

        return SchedulingRecord(
            item_id=item_id,
            next_review=now + new_interval * DAY_MS,
            interval=new_interval,
            repetition=new_repetition,
            easiness_factor=new_ef,
            status=SM2Algorithm.status_for_quality(quality),
            correct_count=correct_count,
            miss_count=miss_count,
            last_reviewed=now,
            session_correct=session_correct,
            session_miss=session_miss
        )

    @staticmethod
    def status_for_quality(quality: int) -> str:
        """Mastery status implied by the latest answer"""
        if quality >= 4:
            return "graduated"
        if quality >= 3:
            return "review"
        return "learning"

    @staticmethod
    def get_due_items(records: Mapping[str, SchedulingRecord], now_ms: int = None) -> List[SchedulingRecord]:
        """Get all records whose next review time has passed, in mapping order"""
        now = now_ms if now_ms is not None else now_millis()
        return [record for record in records.values() if record.next_review <= now]

    @staticmethod
    def is_due(record: SchedulingRecord, now_ms: int = None) -> bool:
        """Check if an item is due for review"""
        now = now_ms if now_ms is not None else now_millis()
        return record.next_review <= now

    @staticmethod
    def days_overdue(record: SchedulingRecord, now_ms: int = None) -> int:
        """Calculate how many whole days overdue a review is"""
        now = now_ms if now_ms is not None else now_millis()
        if now < record.next_review:
            return 0
        return (now - record.next_review) // DAY_MS


calculate_review = SM2Algorithm.calculate_review
get_due_items = SM2Algorithm.get_due_items
