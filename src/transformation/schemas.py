"""
Transformation Layer Schemas

Section layouts, fixed store configuration and field defaults for the
menu document.
"""

from enum import Enum
from typing import Optional


class SectionLayout(Enum):
    """Output shape of a menu section"""

    GROUPED = "grouped"  # categories keyed by display group
    SPECIAL = "special"  # specialProducts with compound prices
    STANDARD = "standard"  # flat prices + products

    @classmethod
    def from_slug(cls, slug: Optional[str]) -> "SectionLayout":
        return SECTION_LAYOUTS.get(slug, cls.STANDARD)


SECTION_LAYOUTS = {
    "pods": SectionLayout.GROUPED,
    "extracts": SectionLayout.GROUPED,
    "donas": SectionLayout.SPECIAL,
}

STORE_INFO = {
    "name": "El Tío Green",
    "tagline": "Premium Cannabis Collection",
    "logo": "/images/logo.jpg",
}

DEFAULT_IMAGES = {
    "flower": "/images/default-flower.jpg",
    "concentrate": "/images/default-concentrate.jpg",
    "extract": "/images/default-extract.jpg",
    "edible": "/images/default-edible.jpg",
}

# Defaults for blank fields
DEFAULT_SECTION_TITLE = "Section"
DEFAULT_SECTION_SUBTITLE = ""
DEFAULT_SECTION_ICON = "📋"
DEFAULT_PRODUCT_NAME = "Unnamed Product"
DEFAULT_GROUP_TITLE = "Unnamed Group"
DEFAULT_SPECIAL_PRICE = "$0"
