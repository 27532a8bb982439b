"""
Data Fetcher - Extract Layer

Fetches the three menu tables from Airtable and flattens the raw records
into DataFrames. No business logic: only field mapping and type cleanup.
"""

import polars as pl
from typing import List, Dict, Any, Optional
from .airtable_api import AirtableAPIClient
from .schemas import (
    RAW_SECTIONS_SCHEMA,
    RAW_PRODUCTS_SCHEMA,
    RAW_SECTION_PRICES_SCHEMA,
)
import logging

logger = logging.getLogger(__name__)

# Airtable table names
SECTIONS_TABLE = "Sections"
PRODUCTS_TABLE = "Products"
SECTION_PRICES_TABLE = "SectionPrices"

SECTIONS_SORT_FIELD = "displayOrder"


def as_text(value: Any) -> Optional[str]:
    """Coerce an Airtable cell value to text, keeping None as None"""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def as_id_list(value: Any) -> Optional[List[str]]:
    """Linked-record ids; anything that is not a list links to nothing"""
    if not isinstance(value, list):
        return None
    return [str(v) for v in value]


def first_attachment_url(value: Any) -> Optional[str]:
    """URL of the first attachment in an attachment field, if any"""
    if not isinstance(value, list) or not value:
        return None
    first = value[0]
    if not isinstance(first, dict):
        return None
    return as_text(first.get("url"))


def section_row(record: Dict[str, Any]) -> Dict[str, Any]:
    fields = record.get("fields") or {}
    return {
        "record_id": record["id"],
        "id": as_text(fields.get("id")),
        "title": as_text(fields.get("title")),
        "subtitle": as_text(fields.get("subtitle")),
        "icon": as_text(fields.get("icon")),
        "displayOrder": as_number(fields.get("displayOrder")),
    }


def product_row(record: Dict[str, Any]) -> Dict[str, Any]:
    fields = record.get("fields") or {}
    return {
        "record_id": record["id"],
        "id": as_text(fields.get("id")),
        "name": as_text(fields.get("name")),
        "type": as_text(fields.get("type")),
        "description": as_text(fields.get("description")),
        "image_url": first_attachment_url(fields.get("image")),
        "section_ids": as_id_list(fields.get("Section")),
        "display_group": as_text(fields.get("displayGroup")),
        "individual_price": as_text(fields.get("individualPrice")),
    }


def section_price_row(record: Dict[str, Any]) -> Dict[str, Any]:
    fields = record.get("fields") or {}
    return {
        "record_id": record["id"],
        "weight": as_text(fields.get("weight")),
        "price": as_text(fields.get("price")),
        "section_ids": as_id_list(fields.get("Section")),
        "display_group": as_text(fields.get("displayGroup")),
    }


def records_to_frame(
    records: List[Dict[str, Any]], row_mapper, schema: pl.Schema
) -> pl.DataFrame:
    """
    Flatten raw Airtable records into a DataFrame with the given schema

    Args:
        records: Raw records from the API
        row_mapper: Function mapping one record to one row dict
        schema: Target schema

    Returns:
        pl.DataFrame: One row per record, in record order
    """
    rows = [row_mapper(record) for record in records]
    return pl.DataFrame(rows, schema=schema)


def fetch_raw_sections(client: AirtableAPIClient) -> pl.DataFrame:
    """
    Fetch all sections, ordered by displayOrder

    Returns:
        pl.DataFrame: Sections with RAW_SECTIONS_SCHEMA
    """
    logger.info("Fetching sections from Airtable")

    try:
        records = client.fetch_all(SECTIONS_TABLE, sort_field=SECTIONS_SORT_FIELD)
        df = records_to_frame(records, section_row, RAW_SECTIONS_SCHEMA)
        logger.info(f"Fetched {df.height} raw section records")
        return df

    except Exception as e:
        logger.error(f"❌ Error fetching sections: {e}")
        raise


def fetch_raw_products(client: AirtableAPIClient) -> pl.DataFrame:
    """
    Fetch all products

    Returns:
        pl.DataFrame: Products with RAW_PRODUCTS_SCHEMA
    """
    logger.info("Fetching products from Airtable")

    try:
        records = client.fetch_all(PRODUCTS_TABLE)
        df = records_to_frame(records, product_row, RAW_PRODUCTS_SCHEMA)
        logger.info(f"Fetched {df.height} raw product records")
        return df

    except Exception as e:
        logger.error(f"❌ Error fetching products: {e}")
        raise


def fetch_raw_section_prices(client: AirtableAPIClient) -> pl.DataFrame:
    """
    Fetch all section prices

    Returns:
        pl.DataFrame: Section prices with RAW_SECTION_PRICES_SCHEMA
    """
    logger.info("Fetching section prices from Airtable")

    try:
        records = client.fetch_all(SECTION_PRICES_TABLE)
        df = records_to_frame(records, section_price_row, RAW_SECTION_PRICES_SCHEMA)
        logger.info(f"Fetched {df.height} raw section price records")
        return df

    except Exception as e:
        logger.error(f"❌ Error fetching section prices: {e}")
        raise
