"""Content stores — the durable collaborator behind the repository.

A store offers ``create``, ``find``, ``find_one`` and ``delete_one`` and
maintains a unique index on ``name``.  ``create`` signals a conflict with
``UniqueConstraintError``; the index check and the write happen under one
exclusive lock so concurrent creates with the same name cannot both succeed.

``MemoryContentStore`` keeps records in process memory and locks with a
``threading.Lock``.  ``JsonContentStore`` keeps them in a single JSON file
shared by every process that opens the same directory: each mutation takes
a file lock, reloads the file, applies the change and replaces the file
atomically.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
import threading
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, ContextManager, Protocol

from filelock import FileLock
from pydantic import BaseModel, Field

from contentkit.content.models import ContentRecord, ValidatedContent
from contentkit.errors import UniqueConstraintError

logger = logging.getLogger(__name__)

STORE_FILENAME = ".contentkit-store.json"
LOCK_SUFFIX = ".lock"
UNIQUE_FIELD = "name"


class ContentStore(Protocol):
    """Operations the repository needs from a durable store."""

    def create(self, content: ValidatedContent) -> ContentRecord: ...

    def find(self, where: Mapping[str, Any] | None = None) -> list[ContentRecord]: ...

    def find_one(self, record_id: str) -> ContentRecord | None: ...

    def delete_one(self, record_id: str) -> bool: ...


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    records: list[ContentRecord] = Field(default_factory=list)


class MemoryContentStore:
    """In-process store with a unique index on ``name``.

    Records are kept in insertion order, which is the order ``find``
    returns them in.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, ContentRecord] = {}
        self._names: dict[str, str] = {}

    # ── Private helpers ──────────────────────────────────────────

    def _index(self, record: ContentRecord) -> None:
        self._records[record.id] = record
        self._names[record.name] = record.id

    def _unindex(self, record: ContentRecord) -> None:
        self._records.pop(record.id, None)
        self._names.pop(record.name, None)

    def _exclusive(self) -> ContextManager[object]:
        """Lock shared with other holders of the same data; none in memory."""
        return contextlib.nullcontext()

    def _refresh(self) -> None:
        """Reload from durable storage; called with the lock held."""

    def _persist(self) -> None:
        """Write to durable storage; called with the lock held."""

    # ── Write operations ─────────────────────────────────────────

    def create(self, content: ValidatedContent) -> ContentRecord:
        """Insert a new record, assigning its id and timestamps.

        Raises UniqueConstraintError if the name is already taken.  If the
        write fails the record is not kept.
        """
        now = datetime.now(tz=UTC)
        record = ContentRecord(
            id=uuid.uuid4().hex,
            type=content.type,
            name=content.name,
            content=content.content,
            created_at=now,
            updated_at=now,
        )
        with self._lock, self._exclusive():
            self._refresh()
            if record.name in self._names:
                raise UniqueConstraintError(UNIQUE_FIELD, record.name)
            self._index(record)
            try:
                self._persist()
            except Exception:
                self._unindex(record)
                raise
        return record

    def delete_one(self, record_id: str) -> bool:
        """Delete a record by id.

        Returns True if a record was removed, False if the id was unknown.
        """
        with self._lock, self._exclusive():
            self._refresh()
            record = self._records.get(record_id)
            if record is None:
                return False
            self._unindex(record)
            try:
                self._persist()
            except Exception:
                self._index(record)
                raise
        return True

    # ── Read operations ──────────────────────────────────────────

    def find(self, where: Mapping[str, Any] | None = None) -> list[ContentRecord]:
        """Return records whose fields equal every value in ``where``."""
        criteria = dict(where or {})
        unknown = set(criteria) - set(ContentRecord.model_fields)
        if unknown:
            raise ValueError(f"Unknown filter fields: {sorted(unknown)}")
        with self._lock:
            self._refresh()
            records = list(self._records.values())
        return [
            r for r in records
            if all(getattr(r, key) == value for key, value in criteria.items())
        ]

    def find_one(self, record_id: str) -> ContentRecord | None:
        """Return a record by id, or None if not found."""
        with self._lock:
            self._refresh()
            return self._records.get(record_id)

    def __len__(self) -> int:
        return len(self._records)


class JsonContentStore(MemoryContentStore):
    """JSON-backed store shared across processes.

    The file is the source of truth; the in-memory index is rebuilt from
    it before every operation.
    """

    def __init__(self, directory: Path) -> None:
        super().__init__()
        self._path = directory / STORE_FILENAME
        self._file_lock = FileLock(str(self._path) + LOCK_SUFFIX)
        with self._lock:
            self._refresh()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt content store at %s, starting fresh", self._path)
            return _StoreData()

    def _exclusive(self) -> ContextManager[object]:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        return self._file_lock

    def _refresh(self) -> None:
        self._records.clear()
        self._names.clear()
        for record in self._load().records:
            self._index(record)

    def _persist(self) -> None:
        data = _StoreData(records=list(self._records.values()))
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=self._path.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data.model_dump_json(indent=2))
            os.replace(tmp_name, self._path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise
