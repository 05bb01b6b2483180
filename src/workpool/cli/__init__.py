"""
CLI layer for workpool.

Provides a Typer application whose sub-commands drive the pool from the
terminal: a demonstration run and configuration inspection.

Entry point::

    workpool --help
"""

from workpool.cli.app import app

__all__ = ["app"]
