"""Progress statistics and caller-owned adjustments of scheduling records"""

from datetime import date, timedelta
from typing import List, Mapping, Optional, Tuple

from review_engine.schemas import ProgressStats, SchedulingRecord
from review_engine.sm2 import SM2Algorithm, round_half_up


def get_weak_items(
    records: Mapping[str, SchedulingRecord],
    threshold: int = 2,
    limit: int = 5
) -> List[SchedulingRecord]:
    """Items missed more than `threshold` times, most missed first"""
    weak = [record for record in records.values() if record.miss_count > threshold]
    weak.sort(key=lambda record: record.miss_count, reverse=True)
    return weak[:limit]


def overall_accuracy(records: Mapping[str, SchedulingRecord]) -> int:
    """Percent of correct answers over all lifetime attempts, 0 without attempts"""
    total_correct = 0
    total_attempts = 0
    for record in records.values():
        total_correct += record.correct_count
        total_attempts += record.correct_count + record.miss_count
    if total_attempts == 0:
        return 0
    return round_half_up(total_correct / total_attempts * 100)


def summarize_progress(
    records: Mapping[str, SchedulingRecord],
    total_items: int,
    now_ms: int = None,
    weak_threshold: int = 2,
    weak_limit: int = 5
) -> ProgressStats:
    """Build dashboard numbers for a progress map"""
    return ProgressStats(
        total_items=total_items,
        learned_count=len(records),
        graduated_count=sum(1 for record in records.values() if record.status == "graduated"),
        due_count=len(SM2Algorithm.get_due_items(records, now_ms=now_ms)),
        accuracy=overall_accuracy(records),
        weak_items=get_weak_items(records, weak_threshold, weak_limit)
    )


def clear_weak_status(record: SchedulingRecord) -> SchedulingRecord:
    """Forget the lifetime misses of an item; scheduling is left untouched"""
    return record.model_copy(update={"miss_count": 0})


def record_session_accuracy(record: SchedulingRecord, correct: bool) -> SchedulingRecord:
    """Count one answer of a daily/simulation session towards the accuracy counters"""
    if correct:
        return record.model_copy(update={"session_correct": (record.session_correct or 0) + 1})
    return record.model_copy(update={"session_miss": (record.session_miss or 0) + 1})


def session_accuracy(record: SchedulingRecord) -> Optional[float]:
    """Session accuracy in percent, or None if the item was never answered in a session"""
    correct = record.session_correct or 0
    attempts = correct + (record.session_miss or 0)
    if attempts == 0:
        return None
    return correct / attempts * 100


def review_history_window(
    history: Mapping[str, int],
    today: date,
    days: int = 7
) -> List[Tuple[str, int]]:
    """
    Review counts for the last `days` days ending today, oldest first.
    Days without reviews are reported as 0. Keys are YYYY-MM-DD.
    """
    window = []
    for offset in range(days - 1, -1, -1):
        key = (today - timedelta(days=offset)).strftime("%Y-%m-%d")
        window.append((key, history.get(key, 0)))
    return window
