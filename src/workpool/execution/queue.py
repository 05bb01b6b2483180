"""Task Queue — thread-safe FIFO hand-off between producers and workers.

ARCHITECTURE
────────────
::

    TaskQueue
      ├── .push(task)            ─ append at tail, wake one waiter
      ├── .pop()                 ─ block until a task or stop; None = stopped + empty
      └── .request_stop(discard) ─ set stop flag, wake all waiters

One ``threading.Lock`` guards both the deque and the stop flag, and the
``threading.Condition`` built on it is always waited on in a predicate
loop. A stop requested between a worker's emptiness check and its wait
therefore cannot be missed.

Related modules:
    pool.py — WorkerPool, the queue's only consumer
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable

from workpool.core.errors import PoolShutdownError

Task = Callable[[], object]


class TaskQueue:
    """Unbounded FIFO of zero-argument tasks.

    Tasks are never reordered: ``push`` appends at the tail and ``pop``
    removes from the head. After ``request_stop`` the queue still hands out
    whatever is pending (drain) and only then reports ``None``.

    Example:
        >>> q = TaskQueue()
        >>> q.push(lambda: print("hi"))
        >>> task = q.pop()
        >>> task()
        hi
    """

    def __init__(self) -> None:
        self._tasks: deque[Task] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._stopped = False

    def push(self, task: Task) -> None:
        """Append *task* and wake exactly one waiting worker.

        Raises:
            PoolShutdownError: If stop has already been requested
        """
        with self._not_empty:
            if self._stopped:
                raise PoolShutdownError("Cannot push to a stopped task queue")
            self._tasks.append(task)
            self._not_empty.notify()

    def pop(self) -> Task | None:
        """Remove and return the head task, waiting while the queue is empty.

        Returns ``None`` only once the queue is empty and stop has been
        requested.
        """
        with self._not_empty:
            while not self._tasks and not self._stopped:
                self._not_empty.wait()
            if self._tasks:
                return self._tasks.popleft()
            return None

    def request_stop(self, discard_pending: bool = False) -> list[Task]:
        """Signal stop and wake every waiter.

        Args:
            discard_pending: Remove all queued tasks instead of letting the
                workers drain them.

        Returns:
            The discarded tasks in queue order (empty when draining).
        """
        with self._not_empty:
            self._stopped = True
            dropped: list[Task] = []
            if discard_pending:
                dropped = list(self._tasks)
                self._tasks.clear()
            self._not_empty.notify_all()
        return dropped

    @property
    def stopped(self) -> bool:
        with self._lock:
            return self._stopped

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __repr__(self) -> str:
        return f"TaskQueue(pending={len(self)}, stopped={self.stopped})"
