"""Content repository — CRUD façade over a content store.

The repository knows nothing about categories: it persists whatever
validated content it is given and lists by the ``type`` field.
"""

from __future__ import annotations

import logging

from contentkit.content.models import ContentRecord, ValidatedContent
from contentkit.content.store import ContentStore
from contentkit.errors import DuplicateNameError, UniqueConstraintError

logger = logging.getLogger(__name__)

# Alias to avoid shadowing by ContentRepository.list method
_list = list


class ContentRepository:
    """Owns persistence of content records."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    def create(self, content: ValidatedContent) -> ContentRecord:
        """Insert a record and return it with its id and timestamps.

        Uniqueness is left to the store's index; there is no prior
        existence check.

        Raises DuplicateNameError if the name is already taken.
        """
        try:
            record = self._store.create(content)
        except UniqueConstraintError as exc:
            raise DuplicateNameError(content.name) from exc
        logger.info("Created content %s (%s)", record.name, record.id)
        return record

    def list(self, category_id: str) -> _list[ContentRecord]:
        """Return records of ``category_id`` in store order."""
        return self._store.find({"type": category_id})

    def get(self, record_id: str) -> ContentRecord | None:
        """Return a record by id, or None if not found."""
        return self._store.find_one(record_id)

    def delete_by_id(self, record_id: str) -> bool:
        """Delete a record by id.  Deleting a missing id is a no-op.

        Returns True if a record was removed.
        """
        removed = self._store.delete_one(record_id)
        if removed:
            logger.info("Deleted content %s", record_id)
        else:
            logger.debug("No content %s to delete", record_id)
        return removed
