"""Tests for content domain models."""

from datetime import UTC, datetime

import pytest
from contentkit.content.models import (
    CallerIdentity,
    Capability,
    ContentRecord,
    ValidatedContent,
)
from pydantic import ValidationError


class TestCapability:
    def test_enum_values(self):
        assert Capability.READ == "read"
        assert Capability.WRITE == "write"


class TestCallerIdentity:
    def test_defaults_to_read_only(self):
        caller = CallerIdentity(user_id="u1")
        assert caller.capabilities == frozenset({Capability.READ})

    def test_with_write(self):
        caller = CallerIdentity(user_id="u1", capabilities={"read", "write"})
        assert Capability.WRITE in caller.capabilities

    def test_frozen(self):
        caller = CallerIdentity(user_id="u1")
        with pytest.raises(ValidationError):
            caller.user_id = "u2"


class TestValidatedContent:
    def test_creation(self):
        vc = ValidatedContent(type="text", name="text:welcome", content="hello")
        assert vc.name == "text:welcome"

    def test_equality(self):
        a = ValidatedContent(type="text", name="text:a", content="x")
        b = ValidatedContent(type="text", name="text:a", content="x")
        assert a == b


class TestContentRecord:
    def test_creation(self):
        now = datetime.now(tz=UTC)
        record = ContentRecord(
            id="abc",
            type="url",
            name="url:docs",
            content="https://example.com",
            created_at=now,
            updated_at=now,
        )
        assert record.id == "abc"
        assert record.created_at == now

    def test_requires_timestamps(self):
        with pytest.raises(ValidationError):
            ContentRecord(id="abc", type="text", name="text:a", content="x")

    def test_json_round_trip(self):
        now = datetime.now(tz=UTC)
        record = ContentRecord(
            id="abc", type="text", name="text:a", content="x", created_at=now, updated_at=now
        )
        assert ContentRecord.model_validate_json(record.model_dump_json()) == record
