"""
CLI: ``workpool demo`` — run a batch of sleeping tasks on a pool.

Each task reports the worker thread it runs on, which makes the fixed
worker count and the reuse of threads visible.
"""

from __future__ import annotations

import threading
import time

import typer

from workpool.cli.utils import console, err_console, stats_table


def demo(
    workers: int | None = typer.Option(None, "--workers", "-w", help="Worker threads (default: WORKPOOL_WORKERS)"),  # noqa: UP007
    tasks: int = typer.Option(10, "--tasks", "-n", min=0, help="Number of tasks to submit"),
    delay: float = typer.Option(0.5, "--delay", min=0.0, help="Seconds each task sleeps"),
    discard: bool = typer.Option(False, "--discard", help="Discard queued tasks at shutdown instead of draining"),
) -> None:
    """Submit sleeping tasks to a pool, shut it down, and print statistics.

    Example::

        workpool demo --workers 4 --tasks 10 --delay 0.5
    """
    from workpool.core.errors import WorkpoolError
    from workpool.execution import WorkerPool
    from workpool.logging import configure_logging

    configure_logging()

    overrides = {} if workers is None else {"workers": workers}
    try:
        pool = WorkerPool.from_settings(**overrides)
    except WorkpoolError as exc:
        err_console.print(f"[bold red]Error[/bold red] ({exc.category.value}): {exc.message}")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]Started pool[/bold green] {pool.name} "
        f"(workers={pool.size}, tasks={tasks}, delay={delay}s)"
    )

    def make_task(i: int):
        def task() -> None:
            console.print(f"Task {i} is executing on thread {threading.current_thread().name}")
            time.sleep(delay)

        return task

    for i in range(tasks):
        pool.submit(make_task(i))

    dropped = pool.shutdown(wait=True, drain=not discard)
    if dropped:
        console.print(f"[yellow]Discarded {len(dropped)} queued task(s)[/yellow]")

    console.print(stats_table(pool.get_stats()))
