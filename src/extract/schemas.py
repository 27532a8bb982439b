"""
Extract Layer Schemas

Raw data schemas for records coming from the Airtable base.
Each Airtable record is flattened into one row: the record id plus the
fields the menu needs, with linked-record fields kept as lists of ids.
"""

import polars as pl

RAW_SECTIONS_SCHEMA = pl.Schema(
    [
        ("record_id", pl.String()),
        ("id", pl.String()),
        ("title", pl.String()),
        ("subtitle", pl.String()),
        ("icon", pl.String()),
        ("displayOrder", pl.Float64()),
    ]
)

RAW_PRODUCTS_SCHEMA = pl.Schema(
    [
        ("record_id", pl.String()),
        ("id", pl.String()),
        ("name", pl.String()),
        ("type", pl.String()),
        ("description", pl.String()),
        ("image_url", pl.String()),
        ("section_ids", pl.List(pl.String())),
        ("display_group", pl.String()),
        ("individual_price", pl.String()),
    ]
)

RAW_SECTION_PRICES_SCHEMA = pl.Schema(
    [
        ("record_id", pl.String()),
        ("weight", pl.String()),
        ("price", pl.String()),
        ("section_ids", pl.List(pl.String())),
        ("display_group", pl.String()),
    ]
)
