"""
Centralized settings for workpool.

``WorkpoolSettings`` is a validated, cached source of truth for pool
defaults and logging. Every field can be set through a ``WORKPOOL_*``
environment variable or a ``.env`` file, e.g.
``WORKPOOL_WORKERS=8`` or ``WORKPOOL_DRAIN_ON_SHUTDOWN=false``.

Examples:
    >>> from workpool.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.workers
    4
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkpoolSettings(BaseSettings):
    """Workpool configuration.

    Fields
    ──────
    workers            : Default worker count for ``WorkerPool.from_settings``
    drain_on_shutdown  : Run queued tasks at shutdown (False discards them)
    thread_name_prefix : Prefix for pool and worker thread names
    log_level          : structlog / stdlib log level
    log_format         : ``console`` or ``json`` rendering
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKPOOL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Pool ─────────────────────────────────────────────────────
    workers: int = Field(default=4, ge=1, description="Default number of worker threads")
    drain_on_shutdown: bool = Field(default=True, description="Drain queued tasks on shutdown")
    thread_name_prefix: str = Field(default="workpool", min_length=1)

    # ── Logging ──────────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_format: Literal["console", "json"] = Field(default="console")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


_settings: WorkpoolSettings | None = None


def get_settings(*, _force_reload: bool = False) -> WorkpoolSettings:
    """Load, validate, and cache a :class:`WorkpoolSettings` instance.

    Parameters
    ----------
    _force_reload:
        Bypass cache and re-read the environment.
    """
    global _settings

    if _settings is None or _force_reload:
        _settings = WorkpoolSettings()
    return _settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    global _settings
    _settings = None
