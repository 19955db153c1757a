"""Environment-driven settings for simple-flag.

The registry itself never reads the environment. ``FlagSettings`` is an
opt-in layer for applications that want the environment label and logging
options to come from ``SIMPLE_FLAG_*`` variables or a ``.env`` file.

Examples:
    >>> from simple_flag.settings import get_settings
    >>> settings = get_settings()          # reads SIMPLE_FLAG_ENV etc.
    >>> settings.log_level
    'INFO'

Tags:
    settings, configuration, pydantic, environment, simple-flag
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import configure_logging

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FlagSettings(BaseSettings):
    """Settings for registries built with ``FlagRegistry.from_settings``.

    Fields
    ──────
    env        : Environment label compared by ``env_matches``
    log_level  : Structlog log level
    json_logs  : JSON log output; ``None`` auto-detects from the tty
    """

    model_config = SettingsConfigDict(
        env_prefix="SIMPLE_FLAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str | None = None
    log_level: str = "INFO"
    json_logs: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level


_settings_cache: dict[str, FlagSettings] = {}


def get_settings() -> FlagSettings:
    """Return the cached settings, building them on first call."""
    if "default" not in _settings_cache:
        _settings_cache["default"] = FlagSettings()
    return _settings_cache["default"]


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


def configure_logging_from_settings(settings: FlagSettings | None = None) -> None:
    """Apply ``log_level``/``json_logs`` to structlog."""
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


__all__ = [
    "FlagSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging_from_settings",
]
