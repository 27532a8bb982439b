"""
Test Transform Layer - menu assembly over the three section layouts
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.extract.data_fetcher import (
    records_to_frame,
    section_row,
    product_row,
    section_price_row,
)
from src.extract.schemas import (
    RAW_SECTIONS_SCHEMA,
    RAW_PRODUCTS_SCHEMA,
    RAW_SECTION_PRICES_SCHEMA,
)
from src.transformation.schemas import SectionLayout, STORE_INFO, DEFAULT_IMAGES
from src.transformation.transformers import (
    assemble_menu,
    display_groups,
    get_summary_stats,
    items_in_section,
    parse_price_points,
    special_price_fields,
)
from tests.sample_records import SECTION_RECORDS, PRODUCT_RECORDS, SECTION_PRICE_RECORDS


def frames(sections=SECTION_RECORDS, products=PRODUCT_RECORDS, prices=SECTION_PRICE_RECORDS):
    return (
        records_to_frame(sections, section_row, RAW_SECTIONS_SCHEMA),
        records_to_frame(products, product_row, RAW_PRODUCTS_SCHEMA),
        records_to_frame(prices, section_price_row, RAW_SECTION_PRICES_SCHEMA),
    )


def sample_menu():
    return assemble_menu(*frames())


def section_by_slug(menu, slug):
    return next(s for s in menu["sections"] if s["id"] == slug)


def test_section_layout_dispatch():
    assert SectionLayout.from_slug("pods") is SectionLayout.GROUPED
    assert SectionLayout.from_slug("extracts") is SectionLayout.GROUPED
    assert SectionLayout.from_slug("donas") is SectionLayout.SPECIAL
    assert SectionLayout.from_slug("flower") is SectionLayout.STANDARD
    assert SectionLayout.from_slug(None) is SectionLayout.STANDARD


def test_document_has_static_blocks_and_sections_in_fetch_order():
    menu = sample_menu()

    assert menu["storeInfo"] == STORE_INFO
    assert menu["defaultImages"] == DEFAULT_IMAGES
    assert [s["id"] for s in menu["sections"]] == ["flower", "pods", "donas"]


def test_standard_section_shape():
    flower = section_by_slug(sample_menu(), "flower")

    assert set(flower) == {"id", "title", "subtitle", "icon", "prices", "products"}
    assert flower["title"] == "Flower"
    assert flower["subtitle"] == "Indoor grown"
    assert flower["icon"] == "🌿"
    assert flower["prices"] == [
        {"weight": "3.5g", "price": "$35"},
        {"weight": "7", "price": "60"},
    ]
    assert flower["products"] == [
        {
            "name": "OG Kush",
            "type": "Indica",
            "id": "og-kush",
            "imageUrl": "https://img.example/og.jpg",
        },
        {"name": "Blue Dream", "type": "Sativa", "id": "recP2", "imageUrl": None},
    ]


def test_grouped_section_categories():
    pods = section_by_slug(sample_menu(), "pods")

    assert "prices" not in pods and "products" not in pods
    assert [c["title"] for c in pods["categories"]] == ["Live Resin", "Distillate"]

    live_resin = pods["categories"][0]
    assert live_resin["prices"] == [{"weight": "1g", "price": "$40"}]
    assert [p["id"] for p in live_resin["products"]] == ["mango-pod", "lemon-pod"]
    assert live_resin["products"][1] == {
        "name": "Lemon Pod",
        "type": "",
        "id": "lemon-pod",
        "imageUrl": None,
    }

    distillate = pods["categories"][1]
    assert distillate["prices"] == [{"weight": "1g", "price": "$30"}]
    assert [p["id"] for p in distillate["products"]] == ["grape-pod"]


def test_grouped_categories_only_hold_matching_products():
    sections_df, products_df, _ = frames()
    pods = section_by_slug(sample_menu(), "pods")
    by_id = {row["id"]: row for row in products_df.iter_rows(named=True)}

    for category in pods["categories"]:
        for product in category["products"]:
            row = by_id[product["id"]]
            assert "recPods" in row["section_ids"]
            assert row["display_group"] == category["title"]


def test_grouped_section_drops_products_without_display_group():
    # Known behavior: ungrouped products never reach a category.
    pods = section_by_slug(sample_menu(), "pods")
    listed = [p["id"] for c in pods["categories"] for p in c["products"]]

    assert "loose-pod" not in listed


def test_grouped_section_ignores_prices_for_groups_without_products():
    pods = section_by_slug(sample_menu(), "pods")

    assert "Cartridges" not in [c["title"] for c in pods["categories"]]


def test_special_section_prices():
    donas = section_by_slug(sample_menu(), "donas")

    assert set(donas) == {"id", "title", "subtitle", "icon", "specialProducts"}
    choco, vanilla, plain = donas["specialProducts"]

    assert choco["prices"] == [
        {"quantity": "1g", "price": "$10"},
        {"quantity": "3.5g", "price": "$30"},
    ]
    assert "price" not in choco
    assert choco["description"] == "Chocolate glaze"

    assert vanilla["price"] == "$25"
    assert "prices" not in vanilla

    assert plain == {
        "name": "Plain Dona",
        "description": "",
        "id": "recP9",
        "imageUrl": None,
        "price": "$0",
    }


def test_parse_price_points_without_colon_reuses_quantity():
    assert parse_price_points("$10, 2 for $18") == [
        {"quantity": "$10", "price": "$10"},
        {"quantity": "2 for $18", "price": "2 for $18"},
    ]


def test_parse_price_points_trims_parts():
    assert parse_price_points(" 1 : $5 ,6:$25") == [
        {"quantity": "1", "price": "$5"},
        {"quantity": "6", "price": "$25"},
    ]


def test_special_price_fields_blank_defaults_to_zero():
    assert special_price_fields("") == {"price": "$0"}
    assert special_price_fields(None) == {"price": "$0"}


def test_blank_section_fields_get_defaults():
    sections = [{"id": "recBare", "fields": {"id": "edibles", "title": ""}}]
    products = [{"id": "recE1", "fields": {"name": "", "Section": ["recBare"]}}]
    prices = [{"id": "recEP", "fields": {"Section": ["recBare"]}}]

    menu = assemble_menu(*frames(sections, products, prices))
    section = menu["sections"][0]

    assert section["title"] == "Section"
    assert section["subtitle"] == ""
    assert section["icon"] == "📋"
    assert section["products"] == [
        {"name": "Unnamed Product", "type": "", "id": "recE1", "imageUrl": None}
    ]
    assert section["prices"] == [{"weight": "", "price": ""}]


def test_no_products_or_prices_gives_empty_lists():
    sections = SECTION_RECORDS + [
        {"id": "recExtracts", "fields": {"id": "extracts", "title": "Extracts"}}
    ]
    menu = assemble_menu(*frames(sections, [], []))

    flower, pods, donas, extracts = menu["sections"]
    assert flower["prices"] == [] and flower["products"] == []
    assert pods["categories"] == []
    assert extracts["categories"] == []
    assert donas["specialProducts"] == []


def test_no_sections_gives_empty_menu():
    menu = assemble_menu(*frames([], PRODUCT_RECORDS, SECTION_PRICE_RECORDS))

    assert menu["sections"] == []


def test_product_linked_to_several_sections_appears_in_each():
    products = [
        {"id": "recShared", "fields": {"name": "Shared", "Section": ["recFlower", "recDonas"]}}
    ]
    menu = assemble_menu(*frames(SECTION_RECORDS, products, []))

    assert [p["name"] for p in section_by_slug(menu, "flower")["products"]] == ["Shared"]
    assert [p["name"] for p in section_by_slug(menu, "donas")["specialProducts"]] == ["Shared"]


def test_display_groups_first_seen_order():
    _, products_df, _ = frames()

    pods_products = items_in_section(products_df, "recPods")

    assert display_groups(pods_products) == ["Live Resin", "Distillate"]


def test_summary_stats():
    stats = get_summary_stats(sample_menu())

    assert stats["sections"] == 3
    assert stats["products_per_section"] == {"flower": 2, "pods": 3, "donas": 3}
    assert stats["total_products"] == 8
