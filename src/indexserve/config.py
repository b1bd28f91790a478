"""Runtime configuration for indexserve.

Settings are built once at startup and never change afterwards; the app
factory receives them explicitly.  Every field can be set from the
environment with the ``INDEXSERVE_`` prefix, e.g. ``INDEXSERVE_PORT=8080``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Immutable server configuration."""

    model_config = SettingsConfigDict(env_prefix="INDEXSERVE_", frozen=True)

    root: Path = Field(default_factory=Path.cwd, description="Serving root directory")
    host: str = Field(default=DEFAULT_HOST, description="Interface to bind")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="TCP port")
    sort_entries: bool = Field(
        default=False,
        description="Sort listing entries by name instead of enumeration order",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("root")
    @classmethod
    def _check_root(cls, v: Path) -> Path:
        resolved = Path(v).expanduser().resolve()
        if not resolved.is_dir():
            raise ValueError(f"serving root is not a directory: {resolved}")
        return resolved

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {v}")
        return level

    @property
    def root_dir(self) -> str:
        """Serving root as a plain string path."""
        return str(self.root)

    @classmethod
    def load(cls, **overrides) -> Settings:
        """Build settings from the environment, applying non-None overrides."""
        values = {k: v for k, v in overrides.items() if v is not None}
        settings = cls(**values)
        logger.debug("Loaded settings: %s", settings.model_dump())
        return settings
