"""contentkit settings: ``[store]`` and ``[logging]``.

Each layer overrides the one before it: built-in defaults, the first
config file found, ``CONTENTKIT_*`` environment variables, CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".contentkit.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "contentkit" / "config.toml"


class StoreBackend(StrEnum):
    """Where content records are kept."""

    JSON = "json"
    MEMORY = "memory"


class StoreSectionConfig(BaseModel):
    """[store] section."""

    backend: StoreBackend = StoreBackend.JSON
    directory: str = "."


class LoggingSectionConfig(BaseModel):
    """[logging] section."""

    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level


class ContentKitConfig(BaseModel):
    """Top-level configuration model."""

    store: StoreSectionConfig = Field(default_factory=StoreSectionConfig)
    logging: LoggingSectionConfig = Field(default_factory=LoggingSectionConfig)

    @property
    def store_directory(self) -> Path:
        return Path(self.store.directory).expanduser()


# setting key -> (section, field)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "CONTENTKIT_STORE_BACKEND": ("store", "backend"),
    "CONTENTKIT_STORE_DIR": ("store", "directory"),
    "CONTENTKIT_LOG_LEVEL": ("logging", "level"),
}
CLI_OVERRIDES: dict[str, tuple[str, str]] = {
    "store_backend": ("store", "backend"),
    "store_directory": ("store", "directory"),
    "log_level": ("logging", "level"),
}


def load_config(path: str | Path | None = None) -> ContentKitConfig:
    """Read settings from ``path``, or from the first config file found.

    Without ``path``, ``.contentkit.toml`` is looked up in each of
    ``CONFIG_SEARCH_PATHS`` and then ``GLOBAL_CONFIG_PATH`` is tried.
    Environment overrides are applied on top.
    """
    source = _find_config_file(path)
    data = _load_toml(source) if source is not None else {}
    config = ContentKitConfig.model_validate(data)
    env = {key: os.environ[key] for key in ENV_OVERRIDES if key in os.environ}
    return _overlay(config, env, ENV_OVERRIDES)


def merge_cli_overrides(config: ContentKitConfig, **cli_kwargs: object) -> ContentKitConfig:
    """Apply CLI flags that were actually given; ``None`` means unset."""
    given = {key: str(value) for key, value in cli_kwargs.items() if value is not None}
    return _overlay(config, given, CLI_OVERRIDES)


def _find_config_file(path: str | Path | None) -> Path | None:
    if path is not None:
        explicit = Path(path)
        if explicit.exists():
            return explicit
        logger.warning("Config file not found: %s", explicit)
        return None
    candidates = [d / CONFIG_FILENAME for d in CONFIG_SEARCH_PATHS] + [GLOBAL_CONFIG_PATH]
    for candidate in candidates:
        if candidate.exists():
            logger.info("Loaded config from %s", candidate)
            return candidate
    return None


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def _overlay(
    config: ContentKitConfig,
    values: dict[str, str],
    targets: dict[str, tuple[str, str]],
) -> ContentKitConfig:
    if not values:
        return config
    data = config.model_dump()
    for key, value in values.items():
        if key in targets:
            section, field = targets[key]
            data[section][field] = value
    return ContentKitConfig.model_validate(data)
