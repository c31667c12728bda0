"""Content categories — payload schemas and the catalog that maps ids to them.

New categories are added here: define a ``CategoryPayload`` subclass with a
``Literal`` discriminant and register it in ``build_default_catalog``.
Call sites discover categories through the catalog and never name them.
"""

from contentkit.categories import text, url
from contentkit.categories.catalog import CatalogBuilder, SchemaCatalog
from contentkit.categories.models import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NAME_SEPARATOR,
    Category,
    CategoryInfo,
    CategoryPayload,
)
from contentkit.categories.text import TextContent
from contentkit.categories.url import UrlContent


def build_default_catalog() -> SchemaCatalog:
    """Build the catalog of built-in categories (text, then url)."""
    return (
        CatalogBuilder()
        .register(text.CATEGORY_ID, "Text", TextContent)
        .register(url.CATEGORY_ID, "URL", UrlContent)
        .build()
    )


__all__ = [
    "NAME_MAX_LENGTH",
    "NAME_MIN_LENGTH",
    "NAME_SEPARATOR",
    "CatalogBuilder",
    "Category",
    "CategoryInfo",
    "CategoryPayload",
    "SchemaCatalog",
    "TextContent",
    "UrlContent",
    "build_default_catalog",
]
