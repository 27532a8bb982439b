"""
Menu Transformers - Transform Layer

Pure functions that join sections, products and section prices into the
nested menu document rendered by the storefront.
"""

import polars as pl
from typing import List, Dict, Any, Optional
from .schemas import (
    SectionLayout,
    STORE_INFO,
    DEFAULT_IMAGES,
    DEFAULT_SECTION_TITLE,
    DEFAULT_SECTION_SUBTITLE,
    DEFAULT_SECTION_ICON,
    DEFAULT_PRODUCT_NAME,
    DEFAULT_GROUP_TITLE,
    DEFAULT_SPECIAL_PRICE,
)
import logging

logger = logging.getLogger(__name__)


def or_default(value: Optional[str], default: str) -> str:
    """Return value unless it is None or empty"""
    return value if value else default


def items_in_section(df: pl.DataFrame, section_record_id: str) -> pl.DataFrame:
    """
    Rows linked to a section through their section_ids list

    Args:
        df: Products or section prices DataFrame
        section_record_id: Airtable record id of the section

    Returns:
        pl.DataFrame: Matching rows, original order kept
    """
    return df.filter(pl.col("section_ids").list.contains(section_record_id))


def items_in_group(df: pl.DataFrame, group: str) -> pl.DataFrame:
    return df.filter(pl.col("display_group") == group)


def display_groups(products_df: pl.DataFrame) -> List[str]:
    """Distinct non-empty display groups in first-seen order"""
    return (
        products_df.filter(
            pl.col("display_group").is_not_null() & (pl.col("display_group") != "")
        )
        .get_column("display_group")
        .unique(maintain_order=True)
        .to_list()
    )


def price_entries(prices_df: pl.DataFrame) -> List[Dict[str, str]]:
    return [
        {"weight": or_default(row["weight"], ""), "price": or_default(row["price"], "")}
        for row in prices_df.iter_rows(named=True)
    ]


def product_entries(products_df: pl.DataFrame) -> List[Dict[str, Any]]:
    return [
        {
            "name": or_default(row["name"], DEFAULT_PRODUCT_NAME),
            "type": or_default(row["type"], ""),
            "id": or_default(row["id"], row["record_id"]),
            "imageUrl": row["image_url"],
        }
        for row in products_df.iter_rows(named=True)
    ]


def parse_price_points(individual_price: str) -> List[Dict[str, str]]:
    """
    Parse a compound price such as "1g:$10, 3.5g:$30"

    Each comma-separated point is "quantity:price"; a point without a colon
    uses the same text for quantity and price.

    Args:
        individual_price: Raw individualPrice text

    Returns:
        List[Dict]: One {quantity, price} entry per point
    """
    points = []
    for point in individual_price.split(","):
        parts = [part.strip() for part in point.strip().split(":")]
        quantity = parts[0]
        price = parts[1] if len(parts) > 1 and parts[1] else quantity
        points.append({"quantity": quantity or "", "price": price or ""})
    return points


def special_price_fields(individual_price: Optional[str]) -> Dict[str, Any]:
    """Either a "prices" list (compound price) or a scalar "price" field"""
    if individual_price and "," in individual_price:
        return {"prices": parse_price_points(individual_price)}
    return {"price": or_default(individual_price, DEFAULT_SPECIAL_PRICE)}


def build_grouped_section(
    section_record_id: str, products_df: pl.DataFrame, prices_df: pl.DataFrame
) -> Dict[str, Any]:
    """
    Sections split into categories by display group (pods, extracts)

    Products without a display group do not appear in any category.
    """
    section_products = items_in_section(products_df, section_record_id)
    section_prices = items_in_section(prices_df, section_record_id)

    categories = []
    for group in display_groups(section_products):
        categories.append(
            {
                "title": or_default(group, DEFAULT_GROUP_TITLE),
                "prices": price_entries(items_in_group(section_prices, group)),
                "products": product_entries(items_in_group(section_products, group)),
            }
        )

    return {"categories": categories}


def build_special_section(
    section_record_id: str, products_df: pl.DataFrame, prices_df: pl.DataFrame
) -> Dict[str, Any]:
    """Sections whose products carry their own prices (donas)"""
    special_products = []
    for row in items_in_section(products_df, section_record_id).iter_rows(named=True):
        product = {
            "name": or_default(row["name"], DEFAULT_PRODUCT_NAME),
            "description": or_default(row["description"], ""),
            "id": or_default(row["id"], row["record_id"]),
            "imageUrl": row["image_url"],
        }
        product.update(special_price_fields(row["individual_price"]))
        special_products.append(product)

    return {"specialProducts": special_products}


def build_standard_section(
    section_record_id: str, products_df: pl.DataFrame, prices_df: pl.DataFrame
) -> Dict[str, Any]:
    """Sections with one shared price list and a flat product list"""
    return {
        "prices": price_entries(items_in_section(prices_df, section_record_id)),
        "products": product_entries(items_in_section(products_df, section_record_id)),
    }


SECTION_BUILDERS = {
    SectionLayout.GROUPED: build_grouped_section,
    SectionLayout.SPECIAL: build_special_section,
    SectionLayout.STANDARD: build_standard_section,
}


def build_section(
    section: Dict[str, Any], products_df: pl.DataFrame, prices_df: pl.DataFrame
) -> Dict[str, Any]:
    """
    Build one menu section from a sections row

    Args:
        section: Row of the sections DataFrame
        products_df: All products
        prices_df: All section prices

    Returns:
        Dict: Section with id, title, subtitle, icon and its layout's content
    """
    slug = section["id"]
    layout = SectionLayout.from_slug(slug)
    logger.debug(f"Section {slug!r} ({section['record_id']}) uses {layout.value} layout")

    section_data = {
        "id": slug,
        "title": or_default(section["title"], DEFAULT_SECTION_TITLE),
        "subtitle": or_default(section["subtitle"], DEFAULT_SECTION_SUBTITLE),
        "icon": or_default(section["icon"], DEFAULT_SECTION_ICON),
    }
    section_data.update(
        SECTION_BUILDERS[layout](section["record_id"], products_df, prices_df)
    )
    return section_data


def assemble_menu(
    sections_df: pl.DataFrame,
    products_df: pl.DataFrame,
    prices_df: pl.DataFrame,
) -> Dict[str, Any]:
    """
    Assemble the full menu document

    Args:
        sections_df: Sections in display order
        products_df: All products
        prices_df: All section prices

    Returns:
        Dict: JSON-serializable menu with storeInfo, defaultImages, sections
    """
    logger.info("Assembling menu document")

    try:
        sections = [
            build_section(section, products_df, prices_df)
            for section in sections_df.iter_rows(named=True)
        ]

        logger.info(f"Assembled menu with {len(sections)} sections")
        return {
            "storeInfo": dict(STORE_INFO),
            "defaultImages": dict(DEFAULT_IMAGES),
            "sections": sections,
        }

    except Exception as e:
        logger.error(f"❌ Error assembling menu: {e}")
        raise


def get_summary_stats(menu: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get summary statistics for an assembled menu

    Args:
        menu: Menu document

    Returns:
        Dict: Section count and per-section item counts
    """
    per_section = {}
    for section in menu["sections"]:
        if "categories" in section:
            count = sum(len(c["products"]) for c in section["categories"])
        elif "specialProducts" in section:
            count = len(section["specialProducts"])
        else:
            count = len(section["products"])
        per_section[section["id"]] = count

    return {
        "sections": len(menu["sections"]),
        "products_per_section": per_section,
        "total_products": sum(per_section.values()),
    }
