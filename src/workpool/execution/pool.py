"""Worker Pool — fixed-size thread pool fed by a FIFO task queue.

Manifesto:
A pool owns exactly N worker threads for its whole lifetime. Producers
hand over zero-argument callables with ``submit``; workers pull them in
submission order and run them outside any lock. A failing task never
takes its worker down, and ``shutdown`` joins every worker before it
returns, so no thread outlives the pool.

ARCHITECTURE
────────────
::

    WorkerPool(workers=4)
      ├── .submit(task)          ─ TaskQueue.push (fire-and-forget)
      ├── .submit_future(fn, …)  ─ same, with a concurrent.futures.Future
      ├── .shutdown(wait, drain) ─ TaskQueue.request_stop + join workers
      ├── .get_stats()           ─ PoolStats snapshot
      └── .health()              ─ liveness summary

    worker run-loop:  WAIT (pop) ──task──▶ RUN ──done──▶ WAIT
                        │
                        └──None (stopped + empty)──▶ TERMINATED

Related modules:
    queue.py — TaskQueue
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, replace
from typing import Any

from workpool.core.errors import InvalidPoolSizeError, InvalidTaskError, PoolShutdownError
from workpool.execution.queue import Task, TaskQueue
from workpool.logging import get_logger, push_context, set_context

logger = get_logger(__name__)

ErrorHandler = Callable[[Task, BaseException], object]


def _task_name(task: Task) -> str:
    return getattr(task, "__qualname__", None) or repr(task)


@dataclass
class PoolStats:
    """Aggregate statistics for a pool."""

    submitted: int = 0
    completed: int = 0
    failed: int = 0
    dropped: int = 0
    active: int = 0
    peak_active: int = 0
    queued: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "submitted": self.submitted,
            "completed": self.completed,
            "failed": self.failed,
            "dropped": self.dropped,
            "active": self.active,
            "peak_active": self.peak_active,
            "queued": self.queued,
        }


class _FutureTask:
    """Zero-argument task that settles a Future with the call's outcome."""

    def __init__(self, fn: Callable[..., Any], args: tuple, kwargs: dict[str, Any]):
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.future: Future = Future()

    def __call__(self) -> None:
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            result = self.fn(*self.args, **self.kwargs)
        except BaseException as exc:
            self.future.set_exception(exc)
        else:
            self.future.set_result(result)

    def cancel(self) -> bool:
        return self.future.cancel()

    def __repr__(self) -> str:
        return f"_FutureTask({_task_name(self.fn)})"


class WorkerPool:
    """Fixed-size pool of worker threads sharing one :class:`TaskQueue`.

    Shutdown policy:
        Tasks still queued at shutdown are drained (run) by default.
        With ``drain=False`` they are discarded instead; ``shutdown``
        returns them and counts them in ``stats.dropped``.

    Submission after shutdown raises :class:`PoolShutdownError`.

    Example:
        >>> with WorkerPool(workers=4) as pool:
        ...     for i in range(10):
        ...         pool.submit(lambda i=i: print(f"task {i}"))
        >>> # all ten tasks have run and every worker is joined here
    """

    def __init__(
        self,
        workers: int,
        *,
        name: str | None = None,
        drain_on_shutdown: bool = True,
        on_error: ErrorHandler | None = None,
    ):
        """
        Args:
            workers: Number of worker threads (fixed for the pool's lifetime).
            name: Pool name, used as the thread-name prefix. Defaults to
                ``WorkpoolSettings.thread_name_prefix``.
            drain_on_shutdown: Default policy for tasks queued at shutdown.
            on_error: Called as ``on_error(task, exc)`` when a task raises,
                including ``BaseException`` subclasses such as ``SystemExit``.

        Raises:
            InvalidPoolSizeError: If *workers* is not an int >= 1
        """
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise InvalidPoolSizeError(workers)

        if name is None:
            from workpool.core.settings import get_settings

            name = get_settings().thread_name_prefix

        self._name = name
        self._size = workers
        self._drain_on_shutdown = drain_on_shutdown
        self._on_error = on_error
        self._queue = TaskQueue()

        self._stats = PoolStats()
        self._stats_lock = threading.Lock()

        self._threads: list[threading.Thread] = []
        for i in range(workers):
            t = threading.Thread(
                target=self._worker_loop,
                name=f"{name}-worker-{i + 1}",
                daemon=True,
            )
            self._threads.append(t)
            t.start()

        logger.info("pool_started", pool=name, workers=workers)

    @classmethod
    def from_settings(cls, settings: Any | None = None, **overrides: Any) -> WorkerPool:
        """Build a pool from :class:`WorkpoolSettings`.

        Keyword *overrides* are passed straight to the constructor and win
        over the settings values.
        """
        if settings is None:
            from workpool.core.settings import get_settings

            settings = get_settings()

        kwargs: dict[str, Any] = {
            "workers": settings.workers,
            "name": settings.thread_name_prefix,
            "drain_on_shutdown": settings.drain_on_shutdown,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_running(self) -> bool:
        """True until shutdown has been requested."""
        return not self._queue.stopped

    @property
    def pending(self) -> int:
        """Number of tasks waiting in the queue."""
        return len(self._queue)

    @property
    def worker_names(self) -> list[str]:
        return [t.name for t in self._threads]

    # ------------------------------------------------------------------ #
    # Submission
    # ------------------------------------------------------------------ #

    def submit(self, task: Task) -> None:
        """Schedule *task* for execution on some worker.

        Raises:
            InvalidTaskError: If *task* is not callable
            PoolShutdownError: If shutdown has been requested
        """
        if not callable(task):
            raise InvalidTaskError(task)
        # Count before pushing so a snapshot never shows completed > submitted.
        with self._stats_lock:
            self._stats.submitted += 1
        try:
            self._queue.push(task)
        except PoolShutdownError as exc:
            with self._stats_lock:
                self._stats.submitted -= 1
            raise exc.with_context(pool=self._name) from None

    def submit_future(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        """Schedule ``fn(*args, **kwargs)`` and return a Future for its result.

        The future is cancelled if the task is discarded at shutdown.
        """
        if not callable(fn):
            raise InvalidTaskError(fn)
        task = _FutureTask(fn, args, kwargs)
        self.submit(task)
        return task.future

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def shutdown(self, wait: bool = True, *, drain: bool | None = None) -> list[Task]:
        """Stop accepting work and stop the workers.

        Args:
            wait: Join every worker thread before returning.
            drain: Run queued tasks before stopping (True) or discard them
                (False). Defaults to the pool's ``drain_on_shutdown``.

        Returns:
            Tasks that were discarded without running.
        """
        if drain is None:
            drain = self._drain_on_shutdown

        dropped = self._queue.request_stop(discard_pending=not drain)
        if dropped:
            for task in dropped:
                if isinstance(task, _FutureTask):
                    task.cancel()
            with self._stats_lock:
                self._stats.dropped += len(dropped)
            logger.warning("tasks_dropped", pool=self._name, count=len(dropped))

        if wait:
            current = threading.current_thread()
            for t in self._threads:
                if t is not current:
                    t.join()
            logger.info("pool_stopped", pool=self._name, **self.get_stats().to_dict())

        return dropped

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown(wait=True)

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    def get_stats(self) -> PoolStats:
        """Return a snapshot of the pool statistics.

        Counters and ``queued`` are read together under the stats lock.
        ``completed + failed`` never exceeds ``submitted``. A task that a
        worker has just popped may briefly appear in neither ``queued``
        nor ``active``.
        """
        # Lock order: stats lock, then queue lock. Nothing takes them reversed.
        with self._stats_lock:
            snapshot = replace(self._stats)
            snapshot.queued = len(self._queue)
        return snapshot

    def health(self) -> dict[str, Any]:
        """Return pool health.

        Returns:
            dict with healthy, pool, running, workers, alive, stats
        """
        alive = sum(1 for t in self._threads if t.is_alive())
        running = self.is_running
        return {
            "healthy": running and alive == self._size,
            "pool": self._name,
            "running": running,
            "workers": self._size,
            "alive": alive,
            "stats": self.get_stats().to_dict(),
        }

    def __repr__(self) -> str:
        state = "running" if self.is_running else "stopped"
        return f"WorkerPool(name={self._name!r}, workers={self._size}, {state})"

    # ------------------------------------------------------------------ #
    # Worker run-loop
    # ------------------------------------------------------------------ #

    def _worker_loop(self) -> None:
        worker = threading.current_thread().name
        set_context(pool=self._name, worker=worker)
        logger.debug("worker_started", worker=worker)

        while True:
            task = self._queue.pop()
            if task is None:
                break
            self._run_task(task)

        logger.debug("worker_stopped", worker=worker)

    def _run_task(self, task: Task) -> None:
        name = _task_name(task)
        with self._stats_lock:
            self._stats.active += 1
            if self._stats.active > self._stats.peak_active:
                self._stats.peak_active = self._stats.active

        # Each task runs in its own span; events it logs carry task and span_id.
        token = push_context(task=name)
        try:
            task()
        except BaseException as exc:
            # Any BaseException, SystemExit included, is a task failure.
            with self._stats_lock:
                self._stats.failed += 1
            logger.exception("task_failed", task=name, error=f"{type(exc).__name__}: {exc}")
            if self._on_error is not None:
                try:
                    self._on_error(task, exc)
                except BaseException:
                    logger.exception("error_handler_failed", task=name)
        else:
            with self._stats_lock:
                self._stats.completed += 1
        finally:
            token.restore()
            with self._stats_lock:
                self._stats.active -= 1
