"""URL content.

The stored value is the string exactly as submitted; pydantic's URL type
is only used to confirm the shape, since it would otherwise normalize
(e.g. append a trailing slash to a bare host).
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import AfterValidator, AnyUrl, TypeAdapter, ValidationError

from contentkit.categories.models import CategoryPayload

CATEGORY_ID = "url"

_URL_ADAPTER = TypeAdapter(AnyUrl)


def require_absolute_url(value: str) -> str:
    """Return ``value`` unchanged if it is an absolute URL with a host."""
    if value != value.strip():
        raise ValueError("URL must not have surrounding whitespace")
    try:
        parsed = _URL_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise ValueError("must be a valid absolute URL") from exc
    if not parsed.host:
        raise ValueError("URL must include a host")
    return value


class UrlContent(CategoryPayload):
    """An absolute URL under a short unique name."""

    type: Literal["url"]
    content: Annotated[str, AfterValidator(require_absolute_url)]
