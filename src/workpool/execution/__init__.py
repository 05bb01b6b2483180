"""Workpool Execution — fixed-size worker pool over a FIFO task queue.

ARCHITECTURE
────────────
::

    producer ──submit(task)──▶ TaskQueue ──pop()──▶ worker 1..N ──▶ task()
                                  ▲
    shutdown() ──request_stop()───┘   then join every worker

MODULE MAP
──────────
  1. queue.py ─ TaskQueue (lock + condition, FIFO, stop flag)
  2. pool.py  ─ WorkerPool, PoolStats
"""

from workpool.execution.pool import PoolStats, WorkerPool
from workpool.execution.queue import Task, TaskQueue

__all__ = [
    "Task",
    "TaskQueue",
    "WorkerPool",
    "PoolStats",
]
