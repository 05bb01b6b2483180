"""
Workpool core primitives: typed errors and settings.
"""

from workpool.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    InvalidPoolSizeError,
    InvalidTaskError,
    LifecycleError,
    PoolShutdownError,
    ValidationError,
    WorkpoolError,
)
from workpool.core.settings import WorkpoolSettings, clear_settings_cache, get_settings

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "WorkpoolError",
    "ConfigError",
    "InvalidConfigError",
    "InvalidPoolSizeError",
    "LifecycleError",
    "PoolShutdownError",
    "ValidationError",
    "InvalidTaskError",
    # Settings
    "WorkpoolSettings",
    "get_settings",
    "clear_settings_cache",
]
