from datetime import datetime

from review_engine.crud import (
    add_catalog_items,
    apply_review,
    clear_weak_item,
    get_catalog,
    get_catalog_item,
    get_progress,
    get_progress_map,
    get_review_history,
    record_item_accuracy,
    save_progress,
)
from review_engine.schemas import CatalogItemSchema
from review_engine.sm2 import calculate_review


def test_unreviewed_item_has_no_progress(db):
    assert get_progress(db, "k1") is None
    assert get_progress_map(db) == {}


def test_apply_review_persists_record(db, now):
    record = apply_review(db, "k1", 5, now_ms=now)

    stored = get_progress(db, "k1")
    assert stored == record
    assert stored.interval == 1
    assert stored.status == "graduated"


def test_apply_review_chains_previous_state(db, now):
    apply_review(db, "k1", 5, now_ms=now)
    apply_review(db, "k1", 5, now_ms=now)
    record = apply_review(db, "k1", 5, now_ms=now)

    assert record.interval == 16
    assert record.repetition == 3
    assert get_progress(db, "k1").correct_count == 3


def test_apply_review_counts_reviews_per_day(db, now):
    apply_review(db, "k1", 5, now_ms=now)
    apply_review(db, "k2", 1, now_ms=now)

    day = datetime.fromtimestamp(now / 1000).strftime("%Y-%m-%d")
    assert get_review_history(db) == {day: 2}


def test_save_progress_replaces_existing_row(db, now):
    first = calculate_review("k1", None, 5, now_ms=now)
    save_progress(db, first)
    second = calculate_review("k1", first, 2, now_ms=now)
    save_progress(db, second)

    records = get_progress_map(db)
    assert list(records) == ["k1"]
    assert records["k1"] == second


def test_clear_weak_item(db, now):
    apply_review(db, "k1", 0, now_ms=now)
    apply_review(db, "k1", 1, now_ms=now)

    cleared = clear_weak_item(db, "k1")

    assert cleared.miss_count == 0
    assert get_progress(db, "k1").miss_count == 0
    assert clear_weak_item(db, "missing") is None


def test_record_item_accuracy(db, now):
    apply_review(db, "k1", 5, now_ms=now)

    record_item_accuracy(db, "k1", True)
    record = record_item_accuracy(db, "k1", False)

    assert record.session_correct == 1
    assert record.session_miss == 1
    assert get_progress(db, "k1").session_correct == 1
    assert record_item_accuracy(db, "missing", True) is None


def test_catalog_round_trip(db):
    items = [
        CatalogItemSchema(id="n5-2", char="月", meaning="moon", onyomi=["ゲツ", "ガツ"], kunyomi=["つき"], level="N5"),
        CatalogItemSchema(id="n5-1", char="日", meaning="sun", onyomi=["ニチ"], level="N5"),
        CatalogItemSchema(id="n4-1", char="会", meaning="meet", level="N4"),
    ]

    assert add_catalog_items(db, items) == 3

    assert [item.id for item in get_catalog(db)] == ["n4-1", "n5-1", "n5-2"]
    assert [item.id for item in get_catalog(db, level="N5")] == ["n5-1", "n5-2"]
    assert get_catalog_item(db, "n5-2").onyomi == ["ゲツ", "ガツ"]
    assert get_catalog_item(db, "missing") is None


def test_catalog_import_replaces_same_id(db):
    add_catalog_items(db, [CatalogItemSchema(id="n5-1", char="日", meaning="sun")])
    add_catalog_items(db, [CatalogItemSchema(id="n5-1", char="日", meaning="day")])

    assert len(get_catalog(db)) == 1
    assert get_catalog_item(db, "n5-1").meaning == "day"
