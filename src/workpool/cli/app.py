"""
Root Typer application for the workpool CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="workpool",
    help="workpool — fixed-size worker thread pool.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from workpool import __version__

        typer.echo(f"workpool {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """workpool CLI — run the pool demo and inspect configuration."""


# ── Sub-command registration ─────────────────────────────────────────────

from workpool.cli.config import app as config_app  # noqa: E402
from workpool.cli.demo import demo  # noqa: E402

app.command("demo")(demo)
app.add_typer(config_app, name="config", help="Configuration inspection.")
