"""
Structured error types for workpool.

Every error the pool raises carries a category, a retryable flag and an
optional structured context, so callers can log or route failures without
parsing messages.

Architecture:
    ::

        ┌────────────────────────────────────────────────────────┐
        │                    WorkpoolError                        │
        │        (category, retryable, context, cause)            │
        ├────────────────────────────────────────────────────────┤
        │  ConfigError        LifecycleError     ValidationError  │
        │  (CONFIG)           (LIFECYCLE)        (VALIDATION)     │
        │      │                   │                   │          │
        │  InvalidConfigError  PoolShutdownError  InvalidTaskError│
        │      │                                                  │
        │  InvalidPoolSizeError                                   │
        └────────────────────────────────────────────────────────┘

Task failures are not part of this hierarchy: an exception raised by a
task stays inside the worker that ran it and is reported through logging
and the pool's ``on_error`` hook.

Usage:
    from workpool.core.errors import PoolShutdownError

    try:
        pool.submit(job)
    except PoolShutdownError:
        log.warning("pool already stopped, job not scheduled")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    CONFIG = "CONFIG"
    LIFECYCLE = "LIFECYCLE"
    VALIDATION = "VALIDATION"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        pool: Name of the pool the error belongs to
        worker: Name of the worker thread, if any
        metadata: Additional key-value pairs
    """

    pool: str | None = None
    worker: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["pool", "worker"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class WorkpoolError(Exception):
    """
    Base exception for all workpool errors.

    Subclasses set ``default_category`` and ``default_retryable``; both can
    be overridden per instance.

    Examples:
        >>> err = WorkpoolError("boom").with_context(pool="ingest")
        >>> err.to_dict()["context"]
        {'pool': 'ingest'}
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> WorkpoolError:
        """
        Add context to this error (fluent API).

        Usage:
            raise PoolShutdownError("stopped").with_context(pool="ingest")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(WorkpoolError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


class InvalidPoolSizeError(InvalidConfigError):
    """Worker count is not a positive integer."""

    def __init__(self, workers: Any):
        super().__init__(
            "workers",
            workers,
            f"Worker count must be an integer >= 1, got {workers!r}",
        )


# =============================================================================
# LIFECYCLE ERRORS
# =============================================================================


class LifecycleError(WorkpoolError):
    """Operation is not valid in the pool's current lifecycle state."""

    default_category = ErrorCategory.LIFECYCLE
    default_retryable = False


class PoolShutdownError(LifecycleError):
    """Work was submitted after shutdown was requested."""


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(WorkpoolError):
    """Input failed validation."""

    default_category = ErrorCategory.VALIDATION
    default_retryable = False


class InvalidTaskError(ValidationError):
    """Submitted task is not callable."""

    def __init__(self, task: Any):
        self.task = task
        super().__init__(f"Task must be callable with no arguments, got {type(task).__name__}")
