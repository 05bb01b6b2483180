"""
Tests for the logging module.

Tests verify:
- Log context set/push/clear semantics
- The context processor merges context into events
- configure_logging honours settings and is idempotent
- Worker threads bind their own pool/worker context; each task gets a span
"""

import logging
import threading

import structlog

from workpool.execution import WorkerPool
from workpool.logging import (
    LogContext,
    add_context_processor,
    clear_context,
    configure_logging,
    get_context,
    get_logger,
    push_context,
    set_context,
)


class TestLogContext:
    """Test LogContext dataclass."""

    def test_to_dict_excludes_none(self):
        ctx = LogContext(pool="ingest", worker=None)
        assert ctx.to_dict() == {"pool": "ingest"}

    def test_merge_creates_new_context(self):
        ctx1 = LogContext(pool="ingest")
        ctx2 = ctx1.merge(worker="ingest-worker-1")

        assert ctx1.worker is None
        assert ctx2.pool == "ingest"
        assert ctx2.worker == "ingest-worker-1"


class TestContextManagement:
    """Test context set/get/clear operations."""

    def test_set_context_replaces(self):
        set_context(pool="a", worker="w")
        ctx = set_context(pool="b")

        assert ctx.pool == "b"
        assert get_context().worker is None

    def test_clear_context(self):
        set_context(pool="a")
        clear_context()
        assert get_context().to_dict() == {}

    def test_push_context_restores(self):
        set_context(pool="a", span_id="outer")

        token = push_context(task="inner")
        inner = get_context()
        assert inner.task == "inner"
        assert inner.parent_span_id == "outer"
        assert inner.span_id != "outer"

        token.restore()
        assert get_context().task is None
        assert get_context().span_id == "outer"

    def test_context_is_per_thread(self):
        set_context(pool="main")
        seen = []

        t = threading.Thread(target=lambda: seen.append(get_context().pool))
        t.start()
        t.join()

        assert seen == [None]


class TestContextProcessor:
    def test_adds_context_fields(self):
        set_context(pool="p", worker="w")
        event = add_context_processor(None, "info", {"event": "x"})
        assert event == {"event": "x", "pool": "p", "worker": "w"}

    def test_explicit_fields_win(self):
        set_context(pool="p")
        event = add_context_processor(None, "info", {"event": "x", "pool": "explicit"})
        assert event["pool"] == "explicit"


class TestConfigureLogging:
    def test_configures_from_settings(self, monkeypatch):
        monkeypatch.setenv("WORKPOOL_LOG_LEVEL", "DEBUG")
        configure_logging()

        assert logging.getLogger("workpool").isEnabledFor(logging.DEBUG)

    def test_explicit_level_overrides_settings(self):
        configure_logging(level="WARNING")

        assert logging.getLogger("workpool").level == logging.WARNING
        assert not logging.getLogger("workpool").isEnabledFor(logging.DEBUG)

    def test_second_call_is_noop_without_force(self):
        configure_logging(level="ERROR")
        configure_logging(level="DEBUG")
        assert logging.getLogger("workpool").level == logging.ERROR

        configure_logging(level="DEBUG", force=True)
        assert logging.getLogger("workpool").level == logging.DEBUG

    def test_json_output(self, capsys):
        configure_logging(level="INFO", format="json", force=True)
        set_context(pool="jsonpool")

        get_logger("workpool.test").info("hello", answer=42)

        err = capsys.readouterr().err
        assert '"event": "hello"' in err
        assert '"answer": 42' in err
        assert '"pool": "jsonpool"' in err

    def test_worker_events_carry_worker_context(self):
        configure_logging(level="DEBUG", format="json", force=True)
        captured = structlog.testing.LogCapture()
        structlog.configure(processors=[add_context_processor, captured])

        pool = WorkerPool(1, name="ctx")
        pool.submit(lambda: 1 / 0)
        pool.shutdown()

        failures = [e for e in captured.entries if e["event"] == "task_failed"]
        assert failures[0]["pool"] == "ctx"
        assert failures[0]["worker"] == "ctx-worker-1"

    def test_each_task_runs_in_its_own_span(self):
        captured = structlog.testing.LogCapture()
        structlog.configure(processors=[add_context_processor, captured])
        log = get_logger("workpool.test")

        def index_shard():
            log.info("step")

        pool = WorkerPool(1, name="span")
        pool.submit(index_shard)
        pool.submit(index_shard)
        pool.submit(lambda: 1 / 0)
        pool.shutdown()

        steps = [e for e in captured.entries if e["event"] == "step"]
        assert [e["task"] for e in steps] == [index_shard.__qualname__] * 2
        assert all(e["worker"] == "span-worker-1" for e in steps)
        assert steps[0]["span_id"] != steps[1]["span_id"]

        failure = next(e for e in captured.entries if e["event"] == "task_failed")
        assert "span_id" in failure

        stopped = next(e for e in captured.entries if e["event"] == "worker_stopped")
        assert "task" not in stopped
        assert "span_id" not in stopped
