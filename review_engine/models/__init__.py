from review_engine.models.item_progress import ItemProgress
from review_engine.models.catalog_item import CatalogItem
from review_engine.models.review_log import ReviewLog

__all__ = [
    "ItemProgress",
    "CatalogItem",
    "ReviewLog"
]
