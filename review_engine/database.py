from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from review_engine.config import settings

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def init_db():
    """Create all tables"""
    import review_engine.models  # noqa: F401 - registers models on Base
    Base.metadata.create_all(bind=engine)
