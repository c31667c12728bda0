"""Content domain — record models, stores and the repository over them."""

from contentkit.content.models import (
    CallerIdentity,
    Capability,
    ContentInput,
    ContentRecord,
    ValidatedContent,
)
from contentkit.content.repository import ContentRepository
from contentkit.content.store import (
    STORE_FILENAME,
    ContentStore,
    JsonContentStore,
    MemoryContentStore,
)

__all__ = [
    "STORE_FILENAME",
    "CallerIdentity",
    "Capability",
    "ContentInput",
    "ContentRecord",
    "ContentRepository",
    "ContentStore",
    "JsonContentStore",
    "MemoryContentStore",
    "ValidatedContent",
]
