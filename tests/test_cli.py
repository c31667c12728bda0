"""Smoke tests for the contentkit CLI."""

import json
from pathlib import Path

import pytest
from contentkit.cli import app
from typer.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch):
    """Run from an empty directory with no config-related env vars."""
    monkeypatch.chdir(tmp_path)
    for key in ("CONTENTKIT_STORE_BACKEND", "CONTENTKIT_STORE_DIR", "CONTENTKIT_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def _invoke(runner: CliRunner, store: Path, *args: str):
    return runner.invoke(app, ["--store", str(store), *args])


def _list_json(runner: CliRunner, store: Path, category: str) -> list[dict]:
    result = _invoke(runner, store, "list", category, "--json")
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestGlobalOptions:
    def test_help(self, runner: CliRunner):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "add" in result.output

    def test_version(self, runner: CliRunner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "contentkit" in result.output


class TestTypes:
    def test_json(self, runner: CliRunner, tmp_path: Path):
        result = _invoke(runner, tmp_path, "types", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"id": "text", "display_name": "Text"},
            {"id": "url", "display_name": "URL"},
        ]

    def test_table(self, runner: CliRunner, tmp_path: Path):
        result = _invoke(runner, tmp_path, "types")
        assert result.exit_code == 0
        assert "text" in result.output
        assert "URL" in result.output


class TestAddAndList:
    def test_add_then_list(self, runner: CliRunner, tmp_path: Path):
        result = _invoke(runner, tmp_path, "add", "text", "welcome", "hello")
        assert result.exit_code == 0, result.output
        assert "text:welcome" in result.output

        [record] = _list_json(runner, tmp_path, "text")
        assert record["name"] == "text:welcome"
        assert record["content"] == "hello"

    def test_list_defaults_to_first_category(self, runner: CliRunner, tmp_path: Path):
        _invoke(runner, tmp_path, "add", "text", "welcome", "hello")
        result = _invoke(runner, tmp_path, "list", "--json")
        assert result.exit_code == 0
        assert [r["name"] for r in json.loads(result.output)] == ["text:welcome"]

    def test_list_unknown_category_is_empty(self, runner: CliRunner, tmp_path: Path):
        assert _list_json(runner, tmp_path, "video") == []

    def test_list_empty_message(self, runner: CliRunner, tmp_path: Path):
        result = _invoke(runner, tmp_path, "list", "url")
        assert result.exit_code == 0
        assert "No content" in result.output

    def test_invalid_url(self, runner: CliRunner, tmp_path: Path):
        result = _invoke(runner, tmp_path, "add", "url", "docs", "not-a-url")
        assert result.exit_code == 1
        assert "content" in result.output
        assert _list_json(runner, tmp_path, "url") == []

    def test_unknown_category(self, runner: CliRunner, tmp_path: Path):
        result = _invoke(runner, tmp_path, "add", "video", "clip", "x")
        assert result.exit_code == 1
        assert "video" in result.output

    def test_conflict(self, runner: CliRunner, tmp_path: Path):
        _invoke(runner, tmp_path, "add", "text", "welcome", "hello")
        result = _invoke(runner, tmp_path, "add", "text", "welcome", "again")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_same_name_other_category(self, runner: CliRunner, tmp_path: Path):
        _invoke(runner, tmp_path, "add", "text", "welcome", "hello")
        result = _invoke(runner, tmp_path, "add", "url", "welcome", "https://example.com")
        assert result.exit_code == 0, result.output

    def test_table_shows_name_without_category(self, runner: CliRunner, tmp_path: Path):
        _invoke(runner, tmp_path, "add", "text", "hi", "yo")
        result = _invoke(runner, tmp_path, "list", "text")
        assert result.exit_code == 0, result.output
        assert " hi " in result.output
        assert "text:hi" not in result.output


class TestShowAndDelete:
    def test_show(self, runner: CliRunner, tmp_path: Path):
        _invoke(runner, tmp_path, "add", "text", "welcome", "hello")
        [record] = _list_json(runner, tmp_path, "text")

        result = _invoke(runner, tmp_path, "show", record["id"])
        assert result.exit_code == 0
        assert json.loads(result.output)["content"] == "hello"

    def test_show_missing(self, runner: CliRunner, tmp_path: Path):
        result = _invoke(runner, tmp_path, "show", "nope")
        assert result.exit_code == 1

    def test_delete_is_idempotent(self, runner: CliRunner, tmp_path: Path):
        _invoke(runner, tmp_path, "add", "text", "welcome", "hello")
        [record] = _list_json(runner, tmp_path, "text")

        first = _invoke(runner, tmp_path, "delete", record["id"])
        second = _invoke(runner, tmp_path, "delete", record["id"])
        assert first.exit_code == 0
        assert second.exit_code == 0
        assert _list_json(runner, tmp_path, "text") == []


class TestBackend:
    def test_memory_backend_does_not_persist(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(
            app, ["--store", str(tmp_path), "--backend", "memory", "add", "text", "welcome", "hi"]
        )
        assert result.exit_code == 0
        assert _list_json(runner, tmp_path, "text") == []
