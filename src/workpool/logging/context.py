"""
Logging context management using contextvars.

Context set here is attached to every structlog event emitted from the
same thread (or asyncio task). Each worker thread starts with an empty
context and binds its own ``pool`` and ``worker`` names, so log lines from
different workers are distinguishable without passing loggers around.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


def _generate_span_id() -> str:
    """Generate a short span ID (8 hex chars)."""
    return uuid.uuid4().hex[:8]


@dataclass
class LogContext:
    """
    Context attached to all log entries.

    Pool identifiers:
        pool: Pool name
        worker: Worker thread name

    Tracing:
        span_id: Current span identifier
        parent_span_id: Parent span for nested operations

    Task context:
        task: Name of the task currently executing
    """

    pool: str | None = None
    worker: str | None = None

    span_id: str | None = None
    parent_span_id: str | None = None

    task: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs: Any) -> LogContext:
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("workpool_log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(
    pool: str | None = None,
    worker: str | None = None,
    span_id: str | None = None,
    parent_span_id: str | None = None,
    task: str | None = None,
) -> LogContext:
    """
    Set the current log context.

    This replaces the current context. Use push_context() for a scoped span.
    """
    ctx = LogContext(
        pool=pool,
        worker=worker,
        span_id=span_id,
        parent_span_id=parent_span_id,
        task=task,
    )
    _log_context.set(ctx)
    return ctx


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


class _ContextToken:
    """Token for restoring context after a scoped operation."""

    def __init__(self, token):
        self._token = token

    def restore(self) -> None:
        """Restore the previous context."""
        _log_context.reset(self._token)


def push_context(**kwargs: Any) -> _ContextToken:
    """
    Push new context values, returning a token to restore later.

    A fresh ``span_id`` is generated and the previous one becomes
    ``parent_span_id``.

    Usage:
        token = push_context(task="rebuild_index")
        try:
            run()
        finally:
            token.restore()
    """
    current = get_context()
    kwargs.setdefault("parent_span_id", current.span_id)
    kwargs.setdefault("span_id", _generate_span_id())
    token = _log_context.set(current.merge(**kwargs))
    return _ContextToken(token)


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds the log context to every event.

    Explicit event keys win over context values.
    """
    for key, value in get_context().to_dict().items():
        event_dict.setdefault(key, value)
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (typically called with ``__name__``)."""
    return structlog.get_logger(name)
