"""Plain text content."""

from __future__ import annotations

from typing import Literal

from contentkit.categories.models import CategoryPayload

CATEGORY_ID = "text"


class TextContent(CategoryPayload):
    """Free-form text under a short unique name."""

    type: Literal["text"]
    content: str
