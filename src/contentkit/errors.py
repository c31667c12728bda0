"""Error taxonomy for the content core.

Every error the core raises derives from ``ContentKitError`` so callers
can catch the family at once.  None of these are retried internally:
each one means the caller has to change its input.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


class ContentKitError(Exception):
    """Base class for all content core errors."""


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level schema violation."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path or '<input>'}: {self.reason}"


# ── Catalog bootstrap ────────────────────────────────────────────


class DuplicateCategoryError(ContentKitError):
    """A category id was registered twice."""

    def __init__(self, category_id: str) -> None:
        self.category_id = category_id
        super().__init__(f"Category already registered: {category_id!r}")


class CategoryDefinitionError(ContentKitError):
    """A category's schema does not discriminate on its own id."""


class CatalogFrozenError(ContentKitError):
    """Registration attempted after the catalog was built."""


# ── Write-time errors ────────────────────────────────────────────


class CategoryNotFoundError(ContentKitError):
    """The referenced category is not registered."""

    def __init__(self, category_id: str) -> None:
        self.category_id = category_id
        super().__init__(f"Unknown content category: {category_id!r}")


class SchemaValidationError(ContentKitError):
    """The payload violates its category's schema."""

    def __init__(self, category_id: str, violations: Sequence[FieldViolation]) -> None:
        self.category_id = category_id
        self.violations = tuple(violations)
        detail = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Invalid {category_id!r} content: {detail}")

    def fields(self) -> list[str]:
        """Return the offending field paths, in report order."""
        return [v.path for v in self.violations]


class UniqueConstraintError(ContentKitError):
    """Raised by a content store when a unique index rejects a document."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Unique constraint on {field!r} violated by {value!r}")


class DuplicateNameError(ContentKitError):
    """The repository could not insert because the name is taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Content name already exists: {name!r}")


class ConflictError(ContentKitError):
    """Surfaced to callers when an add collides with an existing name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Content {name!r} already exists; choose a different name")
