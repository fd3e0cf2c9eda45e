from sqlalchemy import Column, String, JSON
from review_engine.database import Base

class CatalogItem(Base):
    """Learnable item (kanji, word) imported from a catalog table"""
    __tablename__ = "catalog_items"

    id = Column(String, primary_key=True, index=True)
    char = Column(String, nullable=False)
    meaning = Column(String, nullable=False, default="")
    onyomi = Column(JSON, nullable=False, default=list)  # ["ニチ", "ジツ"]
    kunyomi = Column(JSON, nullable=False, default=list)
    level = Column(String, index=True)  # N5, N4, ...
