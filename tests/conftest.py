"""
Shared pytest fixtures and configuration for workpool tests.

This module provides:
- Settings / logging / log-context cleanup for test isolation
- A ``make_pool`` factory that guarantees every pool is shut down

Usage:
    def test_something(make_pool):
        pool = make_pool(workers=2)
        ...
"""

import sys
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
import structlog

# Ensure workpool package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from workpool.core.settings import clear_settings_cache
from workpool.execution import WorkerPool
from workpool.logging import clear_context
from workpool.logging import config as logging_config


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment_fixture(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Reset settings cache, structlog configuration and log context.

    ``WORKPOOL_*`` variables from the developer's shell are removed so the
    defaults are what tests see.
    """
    import os

    for key in list(os.environ):
        if key.startswith("WORKPOOL_"):
            monkeypatch.delenv(key, raising=False)

    clear_settings_cache()
    clear_context()
    yield
    clear_settings_cache()
    clear_context()
    structlog.reset_defaults()
    logging_config._configured = False


# =============================================================================
# Pool Fixtures
# =============================================================================


@pytest.fixture
def make_pool() -> Generator[Callable[..., WorkerPool], None, None]:
    """
    Factory for worker pools that are always shut down after the test.

    Tests that shut the pool down themselves are unaffected: shutdown is
    idempotent.
    """
    pools: list[WorkerPool] = []

    def _make(workers: int = 2, **kwargs: Any) -> WorkerPool:
        pool = WorkerPool(workers, **kwargs)
        pools.append(pool)
        return pool

    yield _make

    for pool in pools:
        pool.shutdown(wait=True, drain=False)
