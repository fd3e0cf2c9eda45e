from pydantic_settings import BaseSettings
from pathlib import Path

# Get the project root directory (parent of review_engine folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'review.db'}"

    # Item catalog (.csv or .xlsx) used by import-catalog when no path is given
    catalog_path: str = ""

    # Session composition
    session_size: int = 10
    level_run_size: int = 20

    # Dashboard: items with more misses than the threshold are weak
    weak_miss_threshold: int = 2
    weak_item_limit: int = 5

    log_level: str = "WARNING"

    class Config:
        env_file = str(PROJECT_ROOT / ".env")

settings = Settings()
