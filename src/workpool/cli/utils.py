"""
CLI utility helpers — shared consoles and stats rendering.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from workpool.execution import PoolStats

console = Console()
err_console = Console(stderr=True)


def stats_table(stats: PoolStats, title: str = "Pool statistics") -> Table:
    """Render ``PoolStats`` as a two-column table."""
    table = Table(title=title)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for key, value in stats.to_dict().items():
        table.add_row(key, str(value))
    return table
