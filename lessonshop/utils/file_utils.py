"""
File operation utilities.

This module provides utilities for exporting catalog views and
order receipts as JSON and CSV files.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd


logger = logging.getLogger(__name__)


def save_json(data: Dict[str, Any], filepath: Path) -> bool:
    """
    Save data to JSON file.

    Args:
        data: Dictionary data to save
        filepath: Path to save the JSON file

    Returns:
        True if save successful, False otherwise

    Examples:
        >>> save_json({"total": 200}, Path("output/exports/receipt.json"))
        True
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.debug(f"Saved JSON file: {filepath}")
        return True

    except (OSError, TypeError) as e:
        logger.error(f"Failed to save JSON file {filepath}: {e}", exc_info=True)
        return False


def save_csv(df: pd.DataFrame, filepath: Path) -> bool:
    """
    Save DataFrame to CSV file.

    Args:
        df: Pandas DataFrame to save
        filepath: Path to save the CSV file

    Returns:
        True if save successful, False otherwise

    Examples:
        >>> df = pd.DataFrame(shop.displayed_lessons, columns=CATALOG_COLUMNS)
        >>> save_csv(df, Path("output/exports/catalog.csv"))
        True
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        df.to_csv(filepath, index=False, encoding="utf-8")

        logger.debug(f"Saved CSV file: {filepath} ({len(df)} rows)")
        return True

    except OSError as e:
        logger.error(f"Failed to save CSV file {filepath}: {e}", exc_info=True)
        return False


def generate_filename(
    prefix: str,
    extension: str,
    timestamp: Optional[datetime] = None
) -> str:
    """
    Generate filename with timestamp.

    Examples:
        >>> generate_filename("catalog", "csv")
        'catalog_20251019_103045.csv'
    """
    if timestamp is None:
        timestamp = datetime.now()

    return f"{prefix}_{timestamp.strftime('%Y%m%d_%H%M%S')}.{extension}"
