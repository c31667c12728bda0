"""Content service — orchestrates validation and persistence.

The service is stateless between calls: it holds only the collaborators
it was constructed with.  Callers arrive already authorized; the
``CallerIdentity`` they pass is used for attribution only.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from contentkit.categories import CategoryInfo, SchemaCatalog, build_default_catalog
from contentkit.config import ContentKitConfig, StoreBackend
from contentkit.content import (
    CallerIdentity,
    ContentRecord,
    ContentRepository,
    ContentStore,
    JsonContentStore,
    MemoryContentStore,
)
from contentkit.errors import ConflictError, DuplicateNameError
from contentkit.validation import ValidationEngine

logger = logging.getLogger(__name__)


class ContentService:
    """Entry point for adding, listing and deleting content."""

    def __init__(
        self,
        catalog: SchemaCatalog,
        repository: ContentRepository,
        engine: ValidationEngine | None = None,
    ) -> None:
        self._catalog = catalog
        self._repository = repository
        self._engine = engine or ValidationEngine(catalog)

    @property
    def catalog(self) -> SchemaCatalog:
        return self._catalog

    def add(
        self,
        category_id: str,
        name: str,
        content: Any,
        caller: CallerIdentity,
    ) -> ContentRecord:
        """Validate and store a new content record.

        Raises:
            CategoryNotFoundError: If ``category_id`` is not registered.
            SchemaValidationError: If the payload violates the category schema.
            ConflictError: If the canonical name is already taken.
        """
        validated = self._engine.validate(category_id, {"name": name, "content": content})
        try:
            record = self._repository.create(validated)
        except DuplicateNameError as exc:
            raise ConflictError(exc.name) from exc
        logger.info("%s added %s", caller.user_id, record.name)
        return record

    def add_from_input(self, raw_input: Mapping[str, Any], caller: CallerIdentity) -> ContentRecord:
        """Add content from an untyped ``{category_id, name, content}`` request."""
        category_id = raw_input.get("category_id", "")
        return self.add(str(category_id), raw_input.get("name"), raw_input.get("content"), caller)

    def get_by_category(self, category_id: str) -> list[ContentRecord]:
        """Return the records of a category.

        Unknown categories have nothing to show and yield an empty list.
        """
        if category_id not in self._catalog:
            logger.debug("Listing unregistered category %r", category_id)
            return []
        return self._repository.list(category_id)

    def get(self, record_id: str) -> ContentRecord | None:
        """Return a single record by id, or None if not found."""
        return self._repository.get(record_id)

    def get_types(self) -> list[CategoryInfo]:
        """Return ``{id, display_name}`` for every category, in catalog order."""
        return self._catalog.infos()

    def delete(self, record_id: str, caller: CallerIdentity) -> None:
        """Delete a record by id.  Missing ids are not an error."""
        if self._repository.delete_by_id(record_id):
            logger.info("%s deleted %s", caller.user_id, record_id)


def create_store(config: ContentKitConfig) -> ContentStore:
    """Build the content store selected by ``config``."""
    if config.store.backend == StoreBackend.MEMORY:
        return MemoryContentStore()
    return JsonContentStore(config.store_directory)


def create_service(
    config: ContentKitConfig | None = None,
    *,
    catalog: SchemaCatalog | None = None,
    store: ContentStore | None = None,
) -> ContentService:
    """Wire a ``ContentService`` from configuration.

    Args:
        config: Loaded configuration; defaults apply when omitted.
        catalog: Category catalog; the built-in catalog when omitted.
        store: Content store; built from ``config`` when omitted.
    """
    config = config or ContentKitConfig()
    if catalog is None:
        catalog = build_default_catalog()
    repository = ContentRepository(store if store is not None else create_store(config))
    return ContentService(catalog, repository)
