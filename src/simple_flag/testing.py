"""pytest helpers for code that depends on a ``FlagRegistry``.

Requires the ``test`` extra::

    pip install simple-flag[test]

Examples:
    In ``conftest.py``:

    >>> from myapp.features import FEATURES
    >>> from simple_flag.testing import flag_registry_fixture
    >>> features = flag_registry_fixture(FEATURES, name="features")

    In a test:

    >>> def test_new_profile(features, client):
    ...     features.override("new_user_profile", True)
    ...     assert client.get("/profile").template == "new_user_profile"
    ...     # overrides are reset after the test
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

try:
    import pytest
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "simple_flag.testing requires pytest. Install it with: pip install simple-flag[test]"
    ) from exc

from .registry import FlagRegistry


@contextmanager
def overrides_reset(registry: FlagRegistry) -> Iterator[FlagRegistry]:
    """Reset every override made on ``registry`` when the block exits."""
    try:
        yield registry
    finally:
        registry.reset_all_overrides()


def flag_registry_fixture(registry: FlagRegistry, name: str = "flag_registry") -> Any:
    """Build a pytest fixture yielding ``registry`` with overrides reset afterwards.

    Assign the result to a module-level variable in ``conftest.py`` or a test
    module; tests request it by ``name``.
    """

    @pytest.fixture(name=name)
    def _flag_registry() -> Iterator[FlagRegistry]:
        with overrides_reset(registry):
            yield registry

    return _flag_registry


__all__ = ["overrides_reset", "flag_registry_fixture"]
