"""Content domain models — pure Pydantic v2 data types.

``ValidatedContent`` is what the validation engine hands to the
repository; ``ContentRecord`` is what the store hands back, carrying the
store-assigned id and timestamps.  Records are never updated in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

# Untyped client input; only the validation engine consumes it.
ContentInput = Mapping[str, Any]


class Capability(StrEnum):
    """Capabilities a caller may have been granted upstream."""

    READ = "read"
    WRITE = "write"


class CallerIdentity(BaseModel):
    """An already-authorized caller.

    The core trusts this value as given; it is carried through for
    attribution in logs, not checked.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    capabilities: frozenset[Capability] = frozenset({Capability.READ})


class ValidatedContent(BaseModel):
    """A payload that passed its category schema, ready for persistence."""

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    content: Any


class ContentRecord(BaseModel):
    """A stored content record."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    name: str
    content: Any
    created_at: datetime
    updated_at: datetime
