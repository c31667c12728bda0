"""Schema catalog: category id -> display name and payload schema.

Categories are registered on a ``CatalogBuilder`` during bootstrap and
frozen into a ``SchemaCatalog``.  The catalog has no mutating methods,
and the builder refuses registration once it has been built, so the set
of categories is fixed for the lifetime of the process.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from types import MappingProxyType
from typing import Literal, get_args, get_origin

from contentkit.categories.models import Category, CategoryInfo, CategoryPayload
from contentkit.errors import (
    CatalogFrozenError,
    CategoryDefinitionError,
    CategoryNotFoundError,
    DuplicateCategoryError,
)

logger = logging.getLogger(__name__)

# Alias to avoid shadowing by SchemaCatalog.list method
_list = list


def _check_discriminant(category_id: str, schema: type[CategoryPayload]) -> None:
    field = schema.model_fields.get("type")
    annotation = field.annotation if field is not None else None
    if get_origin(annotation) is not Literal or get_args(annotation) != (category_id,):
        raise CategoryDefinitionError(
            f"Schema {schema.__name__} must declare type: Literal[{category_id!r}]"
        )


class SchemaCatalog:
    """Immutable, ordered mapping of category id to ``Category``."""

    def __init__(self, categories: tuple[Category, ...]) -> None:
        self._ordered = categories
        self._by_id = MappingProxyType({c.id: c for c in categories})

    def get(self, category_id: str) -> Category:
        """Return the category for ``category_id``.

        Raises CategoryNotFoundError if it is not registered.
        """
        category = self._by_id.get(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    def find(self, category_id: str) -> Category | None:
        """Return the category for ``category_id``, or None."""
        return self._by_id.get(category_id)

    def list(self) -> _list[Category]:
        """Return categories in registration order."""
        return _list(self._ordered)

    def infos(self) -> _list[CategoryInfo]:
        """Return ``{id, display_name}`` pairs in registration order."""
        return [c.info() for c in self._ordered]

    def default(self) -> Category | None:
        """Return the first registered category, used as initial selection."""
        return self._ordered[0] if self._ordered else None

    @property
    def ids(self) -> _list[str]:
        return [c.id for c in self._ordered]

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __iter__(self) -> Iterator[Category]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"SchemaCatalog({self.ids!r})"


class CatalogBuilder:
    """Collects category registrations and freezes them into a catalog."""

    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}
        self._built = False

    def register(
        self,
        category_id: str,
        display_name: str,
        schema: type[CategoryPayload],
    ) -> CatalogBuilder:
        """Register a category.

        Raises:
            CatalogFrozenError: If ``build()`` has already been called.
            DuplicateCategoryError: If ``category_id`` is already registered.
            CategoryDefinitionError: If the schema's ``type`` literal does
                not equal ``category_id``.
        """
        if self._built:
            raise CatalogFrozenError(
                f"Cannot register {category_id!r}: catalog already built"
            )
        if category_id in self._categories:
            raise DuplicateCategoryError(category_id)
        _check_discriminant(category_id, schema)
        self._categories[category_id] = Category(
            id=category_id, display_name=display_name, schema=schema
        )
        logger.debug("Registered content category %r (%s)", category_id, display_name)
        return self

    def build(self) -> SchemaCatalog:
        """Freeze the registrations into an immutable ``SchemaCatalog``."""
        self._built = True
        return SchemaCatalog(tuple(self._categories.values()))
