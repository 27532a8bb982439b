"""
Local Storage - Load Layer

Functions for writing and reading menu documents as JSON files.
"""

import json
import os
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)


def to_json(menu: Dict[str, Any], indent: int | None = None) -> str:
    """Serialize a menu document, keeping non-ASCII text as-is"""
    return json.dumps(menu, ensure_ascii=False, indent=indent)


def save_json(menu: Dict[str, Any], filepath: str) -> str:
    """
    Save menu document to JSON file

    Args:
        menu: Menu document to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving menu to JSON: {filepath}")

    # Ensure directory exists
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(to_json(menu, indent=2))

    logger.info(f"Saved {len(menu.get('sections', []))} sections to {filepath}")
    return filepath


def load_json(filepath: str) -> Dict[str, Any]:
    """
    Load menu document from JSON file

    Args:
        filepath: Path to JSON file

    Returns:
        Dict: Loaded menu document
    """
    logger.info(f"Loading menu from JSON: {filepath}")

    if not os.path.exists(filepath):
        raise FileNotFoundError(f"JSON file not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)
