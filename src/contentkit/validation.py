"""Validation engine: dispatch untyped input through its category schema.

The engine is a pure function of the catalog and its arguments.  It looks
up the category, runs ``{type, name, content}`` through the category's
pydantic model and, on success, returns a ``ValidatedContent`` whose name
is the canonical ``"<category>:<name>"`` form.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from contentkit.categories import NAME_SEPARATOR, SchemaCatalog
from contentkit.content.models import ContentInput, ValidatedContent
from contentkit.errors import FieldViolation, SchemaValidationError

logger = logging.getLogger(__name__)

_INPUT_FIELDS = ("name", "content")


def canonical_name(category_id: str, name: str) -> str:
    """Build the store-unique name for a user-chosen ``name``."""
    return f"{category_id}{NAME_SEPARATOR}{name}"


def split_canonical_name(value: str) -> tuple[str, str]:
    """Split a canonical name back into ``(category_id, name)``.

    Raises ValueError if ``value`` has no separator.
    """
    category_id, sep, name = value.partition(NAME_SEPARATOR)
    if not sep:
        raise ValueError(f"Not a canonical content name: {value!r}")
    return category_id, name


def _violations(exc: ValidationError) -> list[FieldViolation]:
    return [
        FieldViolation(
            path=".".join(str(part) for part in err["loc"]),
            reason=err["msg"],
        )
        for err in exc.errors()
    ]


class ValidationEngine:
    """Validates raw content input against the catalog's schemas."""

    def __init__(self, catalog: SchemaCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> SchemaCatalog:
        return self._catalog

    def validate(self, category_id: str, raw_input: ContentInput) -> ValidatedContent:
        """Validate ``raw_input`` as content of ``category_id``.

        Args:
            category_id: Registered category identifier.
            raw_input: Untyped mapping carrying at least ``name`` and ``content``.

        Returns:
            The validated record with its canonical name.  ``content`` is
            the submitted value, unchanged.

        Raises:
            CategoryNotFoundError: If the category is not registered.
            SchemaValidationError: If the payload violates the schema.
        """
        category = self._catalog.get(category_id)

        if not isinstance(raw_input, Mapping):
            raise SchemaValidationError(
                category_id,
                [FieldViolation(path="", reason="input must be an object with name and content")],
            )

        candidate: dict[str, object] = {"type": category.id}
        for field in _INPUT_FIELDS:
            if field in raw_input:
                candidate[field] = raw_input[field]

        try:
            payload = category.schema.model_validate(candidate)
        except ValidationError as exc:
            violations = _violations(exc)
            logger.debug("Rejected %s content: %s", category_id, violations)
            raise SchemaValidationError(category_id, violations) from exc

        return ValidatedContent(
            type=payload.type,
            name=canonical_name(category.id, payload.name),
            content=payload.content,
        )
