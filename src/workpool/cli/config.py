"""
CLI: ``workpool config`` — configuration inspection.
"""

from __future__ import annotations

import typer

from workpool.cli.utils import console, err_console

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show current configuration."""
    from workpool.core.settings import get_settings

    settings = get_settings()

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    if format == "env":
        for key, value in sorted(settings.model_dump().items()):
            console.print(f"WORKPOOL_{key.upper()}={value}")
        return

    if format != "table":
        err_console.print(f"[red]Unknown format:[/red] {format}")
        raise typer.Exit(code=2)

    from rich.table import Table

    table = Table(title="workpool settings")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in sorted(settings.model_dump().items()):
        table.add_row(key, str(value))
    console.print(table)
