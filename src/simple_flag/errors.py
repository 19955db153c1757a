"""
Structured error types for the flag registry.

Every failure the registry reports is a ``FlagError`` subclass carrying the
offending flag name and a human-readable message. Errors are raised at the
point of the offending call and never wrapped or translated.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                       FlagError                           │
        │                  (message, flag_name)                     │
        ├──────────────────────────────────────────────────────────┤
        │  FlagAlreadyDefined      define() twice, override() twice │
        │  FlagNotDefined          override() on unknown flag       │
        │  FlagNotOverridden       reset_override() without one     │
        │  FlagArgumentsMismatch   wrong argument count             │
        │                          (expected, given)                │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = FlagNotDefined("new_parser")
    >>> error.flag_name
    'new_parser'
    >>> error.to_dict()["error_type"]
    'FlagNotDefined'

Tags:
    error-handling, exception-hierarchy, feature-flags, simple-flag
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any


class FlagError(Exception):
    """Base exception for all flag registry errors."""

    def __init__(self, message: str, *, flag_name: Hashable | None = None):
        super().__init__(message)
        self.message = message
        self.flag_name = flag_name

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.flag_name is not None:
            result["flag_name"] = str(self.flag_name)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, flag_name={self.flag_name!r})"


class FlagAlreadyDefined(FlagError):
    """Flag is already defined, or already overridden."""

    def __init__(self, name: Hashable, message: str | None = None):
        super().__init__(
            message or f"Feature flag `{name}` is already defined",
            flag_name=name,
        )


class FlagNotDefined(FlagError):
    """Flag was never defined."""

    def __init__(self, name: Hashable):
        super().__init__(f"Feature flag `{name}` is not defined", flag_name=name)


class FlagNotOverridden(FlagError):
    """Flag has no active override to reset."""

    def __init__(self, name: Hashable):
        super().__init__(f"Feature flag `{name}` was not overridden", flag_name=name)


class FlagArgumentsMismatch(FlagError):
    """Evaluator called, or replaced, with the wrong number of arguments.

    ``expected`` is the human form of the required count (``"2"`` or
    ``"2 or more"``), ``given`` the number of arguments actually supplied,
    or the replacement evaluator's arity when an override is rejected.
    """

    def __init__(self, name: Hashable, expected: str, given: int | str):
        self.expected = expected
        self.given = given
        super().__init__(
            f"Flag '{name}' expects {expected} arguments, "
            f"but {given} arguments were given",
            flag_name=name,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["expected"] = self.expected
        result["given"] = self.given
        return result


__all__ = [
    "FlagError",
    "FlagAlreadyDefined",
    "FlagNotDefined",
    "FlagNotOverridden",
    "FlagArgumentsMismatch",
]
