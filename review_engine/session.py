"""Caller-side composition of practice sessions from the progress map"""

import logging
import random
from typing import Iterable, List, Mapping, Optional, Sequence

from review_engine.schemas import CatalogItemSchema, SchedulingRecord
from review_engine.sm2 import SM2Algorithm, now_millis

logger = logging.getLogger(__name__)


def build_practice_session(
    records: Mapping[str, SchedulingRecord],
    catalog_ids: Sequence[str],
    now_ms: int = None,
    size: int = 10,
    rng: Optional[random.Random] = None
) -> List[str]:
    """
    Pick the item ids for the next practice session.

    Priority:
        1. Items due for review
        2. Never-reviewed catalog items, in catalog order
        3. Learned items that are not yet due, soonest first
        4. Random catalog items if the pool is still short

    Ids are deduplicated and the result never exceeds `size`.
    """
    if size <= 0:
        return []

    now = now_ms if now_ms is not None else now_millis()
    rng = rng or random.Random()

    session: List[str] = []
    seen = set()

    def top_up(candidates: Iterable[str]) -> None:
        for item_id in candidates:
            if len(session) >= size:
                return
            if item_id not in seen:
                seen.add(item_id)
                session.append(item_id)

    due = SM2Algorithm.get_due_items(records, now_ms=now)
    top_up(record.item_id for record in due)
    due_count = len(session)

    top_up(item_id for item_id in catalog_ids if item_id not in records)
    new_count = len(session) - due_count

    not_due = sorted(
        (record for record in records.values() if record.next_review > now),
        key=lambda record: record.next_review
    )
    top_up(record.item_id for record in not_due)

    if len(session) < size:
        pool = [item_id for item_id in catalog_ids if item_id not in seen]
        top_up(rng.sample(pool, min(len(pool), size - len(session))))

    logger.info(f"Built session of {len(session)} items ({due_count} due, {new_count} new)")
    return session


def build_level_run(
    catalog: Iterable[CatalogItemSchema],
    level: str,
    size: int = 20,
    rng: Optional[random.Random] = None
) -> List[str]:
    """Pick `size` random items of one level (e.g. N5) for a timed run"""
    rng = rng or random.Random()
    level_ids = [item.id for item in catalog if item.level == level]
    return rng.sample(level_ids, min(len(level_ids), max(size, 0)))
