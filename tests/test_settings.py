"""Tests for simple_flag.settings.

Covers:
- FlagSettings defaults
- SIMPLE_FLAG_* environment overrides
- log_level validation
- get_settings caching
"""

import pytest
import structlog
from pydantic import ValidationError

from simple_flag.settings import (
    FlagSettings,
    clear_settings_cache,
    configure_logging_from_settings,
    get_settings,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run from an empty directory so no stray .env file is read."""
    monkeypatch.chdir(tmp_path)
    for var in ("SIMPLE_FLAG_ENV", "SIMPLE_FLAG_LOG_LEVEL", "SIMPLE_FLAG_JSON_LOGS"):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_env_none(self):
        assert FlagSettings().env is None

    def test_log_level(self):
        assert FlagSettings().log_level == "INFO"

    def test_json_logs_auto(self):
        assert FlagSettings().json_logs is None


class TestEnvOverride:
    def test_env_from_env(self, monkeypatch):
        monkeypatch.setenv("SIMPLE_FLAG_ENV", "production")
        assert FlagSettings().env == "production"

    def test_log_level_upper_cased(self, monkeypatch):
        monkeypatch.setenv("SIMPLE_FLAG_LOG_LEVEL", "debug")
        assert FlagSettings().log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("SIMPLE_FLAG_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError, match="log_level"):
            FlagSettings()

    def test_json_logs_from_env(self, monkeypatch):
        monkeypatch.setenv("SIMPLE_FLAG_JSON_LOGS", "true")
        assert FlagSettings().json_logs is True

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("SIMPLE_FLAG_ENV=staging\n")
        assert FlagSettings().env == "staging"

    def test_unprefixed_vars_ignored(self, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        assert FlagSettings().env is None


class TestCache:
    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("SIMPLE_FLAG_ENV", "staging")
        assert get_settings() is first
        clear_settings_cache()
        assert get_settings().env == "staging"


def test_configure_logging_from_settings():
    configure_logging_from_settings(FlagSettings(log_level="WARNING", json_logs=True))
    config = structlog.get_config()
    assert isinstance(config["processors"][-1], structlog.processors.JSONRenderer)
