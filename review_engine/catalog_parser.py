import logging
import re
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

logger = logging.getLogger(__name__)


class CatalogParser:
    """
    Parse item catalog tables (one learnable item per row).
    Expected columns: Id, Char, Meaning, Onyomi, Kunyomi, Level
    """

    @staticmethod
    def parse_csv_table(file_path: str) -> List[Dict[str, Any]]:
        """Parse CSV format catalog table"""
        df = pd.read_csv(file_path, dtype=str)
        return CatalogParser._parse_frame(df)

    @staticmethod
    def parse_excel_table(file_path: str) -> List[Dict[str, Any]]:
        """Parse Excel format catalog table"""
        df = pd.read_excel(file_path, dtype=str)
        return CatalogParser._parse_frame(df)

    @staticmethod
    def _parse_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
        # Normalize column names
        df.columns = df.columns.str.strip().str.lower()

        catalog_items = []
        for _, row in df.iterrows():
            item_id = CatalogParser._clean(row.get("id"))
            char = CatalogParser._clean(row.get("char"))

            # Skip rows with missing essential data or nan values
            if not item_id or not char:
                continue

            catalog_items.append({
                "id": item_id,
                "char": char,
                "meaning": CatalogParser._clean(row.get("meaning")),
                "onyomi": CatalogParser._split_readings(row.get("onyomi")),
                "kunyomi": CatalogParser._split_readings(row.get("kunyomi")),
                "level": CatalogParser._clean(row.get("level")) or None
            })

        logger.info(f"Parsed {len(catalog_items)} catalog items from {len(df)} rows")
        return catalog_items

    @staticmethod
    def _clean(value: Any) -> str:
        if value is None or pd.isna(value):
            return ""
        return str(value).strip()

    @staticmethod
    def _split_readings(value: Any) -> List[str]:
        """Split 'ニチ; ジツ' or 'ひ, -び' into a list of readings"""
        text = CatalogParser._clean(value)
        if not text:
            return []
        return [part.strip() for part in re.split(r"[;,、]", text) if part.strip()]

    @staticmethod
    def auto_parse(file_path: str) -> List[Dict[str, Any]]:
        """
        Automatically detect file type and parse accordingly.
        Supports: CSV, Excel (xlsx, xls)
        """
        file_ext = Path(file_path).suffix.lower()

        if file_ext == ".csv":
            return CatalogParser.parse_csv_table(file_path)
        elif file_ext in [".xlsx", ".xls"]:
            return CatalogParser.parse_excel_table(file_path)
        else:
            raise ValueError(f"Unsupported file format: {file_ext}. Use .csv or .xlsx")
