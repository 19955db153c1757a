"""
Shared pytest fixtures for simple-flag tests.

This module provides:
- ``src/`` on ``sys.path`` so tests run from a plain checkout
- structlog, root logging and settings-cache reset around every test
- A registry fixture with a few representative flags
"""

import logging
import sys
from pathlib import Path

import pytest
import structlog

# Ensure simple_flag package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simple_flag import FlagRegistry
from simple_flag.settings import clear_settings_cache


@pytest.fixture(autouse=True)
def clean_state():
    """Reset structlog, root logging handlers and cached settings around each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    structlog.reset_defaults()
    clear_settings_cache()
    yield
    structlog.reset_defaults()
    clear_settings_cache()
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def registry() -> FlagRegistry:
    """Empty registry."""
    return FlagRegistry()


@pytest.fixture
def features() -> FlagRegistry:
    """Registry with one flag per common evaluator shape."""

    def setup(f: FlagRegistry) -> None:
        f.define("always_on", lambda: True)
        f.define("always_off", lambda: False)
        f.define("beta_user", lambda user_id: user_id in {1, 2, 3})
        f.define("segment", lambda a, b, *rest: "segment-result")

    return FlagRegistry(env="test", setup=setup)
