from review_engine.crud.progress import (
    get_progress,
    get_progress_map,
    save_progress,
    apply_review,
    clear_weak_item,
    record_item_accuracy
)
from review_engine.crud.catalog import add_catalog_items, get_catalog, get_catalog_item
from review_engine.crud.review_log import increment_review_count, get_review_history

__all__ = [
    "get_progress",
    "get_progress_map",
    "save_progress",
    "apply_review",
    "clear_weak_item",
    "record_item_accuracy",
    "add_catalog_items",
    "get_catalog",
    "get_catalog_item",
    "increment_review_count",
    "get_review_history"
]
