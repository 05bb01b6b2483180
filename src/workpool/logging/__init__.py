"""
Workpool logging - structured, thread-aware logging.

Usage:
    from workpool.logging import configure_logging, get_logger, push_context

    configure_logging()
    log = get_logger(__name__)

    token = push_context(task="rebuild_index")
    try:
        log.info("rebuild_started", shards=4)
    finally:
        token.restore()
"""

from workpool.logging.config import configure_logging
from workpool.logging.context import (
    LogContext,
    add_context_processor,
    clear_context,
    get_context,
    get_logger,
    push_context,
    set_context,
)

__all__ = [
    # Configuration
    "configure_logging",
    # Context
    "LogContext",
    "get_logger",
    "set_context",
    "push_context",
    "clear_context",
    "get_context",
    "add_context_processor",
]
