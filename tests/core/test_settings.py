"""Tests for WorkpoolSettings and the settings cache."""

import pytest
from pydantic import ValidationError

from workpool.core.settings import WorkpoolSettings, clear_settings_cache, get_settings


class TestWorkpoolSettings:
    def test_defaults(self):
        settings = WorkpoolSettings()
        assert settings.workers == 4
        assert settings.drain_on_shutdown is True
        assert settings.thread_name_prefix == "workpool"
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WORKPOOL_WORKERS", "8")
        monkeypatch.setenv("WORKPOOL_DRAIN_ON_SHUTDOWN", "false")
        monkeypatch.setenv("WORKPOOL_LOG_LEVEL", "debug")
        monkeypatch.setenv("WORKPOOL_LOG_FORMAT", "JSON")

        settings = WorkpoolSettings()
        assert settings.workers == 8
        assert settings.drain_on_shutdown is False
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    @pytest.mark.parametrize("workers", ["0", "-3"])
    def test_rejects_non_positive_workers(self, monkeypatch, workers):
        monkeypatch.setenv("WORKPOOL_WORKERS", workers)
        with pytest.raises(ValidationError):
            WorkpoolSettings()

    def test_rejects_unknown_log_format(self):
        with pytest.raises(ValidationError):
            WorkpoolSettings(log_format="xml")

    def test_unrelated_environment_is_ignored(self, monkeypatch):
        monkeypatch.setenv("WORKPOOL_UNKNOWN_KEY", "1")
        assert WorkpoolSettings().workers == 4


class TestSettingsCache:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload_rereads_environment(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("WORKPOOL_WORKERS", "2")

        assert get_settings().workers == first.workers
        assert get_settings(_force_reload=True).workers == 2

    def test_clear_settings_cache(self, monkeypatch):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first
