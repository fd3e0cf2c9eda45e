import logging
from sqlalchemy.orm import Session
from review_engine.models import CatalogItem
from review_engine.schemas import CatalogItemSchema
from typing import List, Optional

logger = logging.getLogger(__name__)

def add_catalog_items(db: Session, items: List[CatalogItemSchema]) -> int:
    """Insert catalog items, replacing existing ones with the same id"""
    for item in items:
        db.merge(CatalogItem(**item.model_dump()))
    db.commit()
    logger.info(f"Stored {len(items)} catalog items")
    return len(items)

def get_catalog(db: Session, level: Optional[str] = None) -> List[CatalogItemSchema]:
    """Get all catalog items in id order, optionally of one level"""
    query = db.query(CatalogItem)
    if level:
        query = query.filter(CatalogItem.level == level)
    return [CatalogItemSchema.model_validate(row) for row in query.order_by(CatalogItem.id).all()]

def get_catalog_item(db: Session, item_id: str) -> Optional[CatalogItemSchema]:
    """Get one catalog item by id"""
    row = db.query(CatalogItem).filter(CatalogItem.id == item_id).first()
    return CatalogItemSchema.model_validate(row) if row else None
