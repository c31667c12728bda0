"""Category definitions and the shared payload base model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator

NAME_SEPARATOR = ":"
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50


class CategoryPayload(BaseModel):
    """Base schema for a category payload.

    Subclasses narrow ``type`` to a ``Literal`` of their category id and
    give ``content`` its category-specific shape.  ``name`` is the
    user-chosen label; the canonical stored name is derived from it later.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: str
    name: Annotated[
        str,
        StringConstraints(
            strip_whitespace=True,
            min_length=NAME_MIN_LENGTH,
            max_length=NAME_MAX_LENGTH,
        ),
    ]
    content: object

    @field_validator("name")
    @classmethod
    def _reject_separator(cls, value: str) -> str:
        if NAME_SEPARATOR in value:
            raise ValueError(f"name must not contain {NAME_SEPARATOR!r}")
        return value


@dataclass(frozen=True)
class Category:
    """A registered content category."""

    id: str
    display_name: str
    schema: type[CategoryPayload]

    def info(self) -> CategoryInfo:
        return CategoryInfo(id=self.id, display_name=self.display_name)


class CategoryInfo(BaseModel):
    """Discovery entry for a category: id plus human label."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
