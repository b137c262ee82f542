"""
Centralized settings for apidoc.

All fields can be set via ``APIDOC_*`` environment variables (for example
``APIDOC_DOCS_DIR=/srv/docs``) or a ``.env`` file in the working directory.

Tags:
    apidoc-core, configuration, settings, pydantic
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from apidoc.core.errors import ConfigError


class StorageBackend(str, Enum):
    """Where catalog records are persisted."""

    FILE = "file"
    SQLITE = "sqlite"
    MEMORY = "memory"


class ApiDocSettings(BaseSettings):
    """apidoc configuration.

    Fields
    ──────
    data_dir        : Directory holding catalog records (file backend)
    docs_dir        : Root of the generated markdown tree
    storage_backend : file | sqlite | memory
    sqlite_path     : Database file for the sqlite backend
    log_level       : structlog level
    log_format      : console | json
    """

    model_config = SettingsConfigDict(
        env_prefix="APIDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".apidoc" / "data",
        description="Catalog record directory",
    )
    docs_dir: Path = Field(
        default_factory=lambda: Path.home() / ".apidoc" / "docs",
        description="Generated documentation directory",
    )
    storage_backend: StorageBackend = Field(default=StorageBackend.FILE)
    sqlite_path: Path | None = Field(default=None)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"unsupported log level: {value}")
        return level

    @field_validator("log_format")
    @classmethod
    def _normalize_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in {"console", "json"}:
            raise ValueError(f"unsupported log format: {value}")
        return fmt

    @property
    def resolved_sqlite_path(self) -> Path:
        return self.sqlite_path or (self.data_dir / "apidoc.db")


_settings_cache: dict[str, ApiDocSettings] = {}


def get_settings(*, _force_reload: bool = False) -> ApiDocSettings:
    """Load, validate, and cache an :class:`ApiDocSettings` instance.

    Raises:
        ConfigError: An environment variable or ``.env`` entry is invalid
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    try:
        settings = ApiDocSettings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid apidoc settings: {exc}", cause=exc) from exc
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
