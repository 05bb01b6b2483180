"""
workpool - a fixed-size worker thread pool with a FIFO task queue.

Usage:
    from workpool import WorkerPool

    with WorkerPool(workers=4) as pool:
        pool.submit(do_work)
        future = pool.submit_future(compute, 21)

    future.result()
"""

from workpool.core.errors import (
    ConfigError,
    ErrorCategory,
    InvalidConfigError,
    InvalidPoolSizeError,
    InvalidTaskError,
    LifecycleError,
    PoolShutdownError,
    ValidationError,
    WorkpoolError,
)
from workpool.core.settings import WorkpoolSettings, get_settings
from workpool.execution import PoolStats, Task, TaskQueue, WorkerPool
from workpool.logging import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "WorkerPool",
    "TaskQueue",
    "Task",
    "PoolStats",
    "WorkpoolError",
    "ErrorCategory",
    "ConfigError",
    "InvalidConfigError",
    "InvalidPoolSizeError",
    "LifecycleError",
    "PoolShutdownError",
    "ValidationError",
    "InvalidTaskError",
    "WorkpoolSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
