"""Evaluator arity, computed once from a callable's signature.

An evaluator either takes exactly ``n`` positional arguments (fixed) or at
least ``n`` (variadic). A variadic evaluator with defaulted parameters but no
``*args`` also has an upper bound. The signed encoding keeps the familiar
shape used in error messages and comparisons: fixed ``n`` is ``n``, variadic
``n`` is ``-(n + 1)``.

Examples:
    >>> Arity.of(lambda a, b: True)
    Arity(required=2, variadic=False, maximum=None)
    >>> Arity.of(lambda a, *rest: True).encoded
    -2
    >>> Arity.from_encoded(-3).describe()
    '2 or more'
    >>> Arity.of(lambda a, b=1: True).describe()
    '1 to 2'
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class Arity:
    """Required positional argument count plus whether more are accepted.

    ``maximum`` caps a variadic arity; ``None`` means unbounded.
    """

    required: int
    variadic: bool = False
    maximum: int | None = None

    @classmethod
    def fixed(cls, required: int) -> Arity:
        return cls(required, False)

    @classmethod
    def at_least(cls, required: int) -> Arity:
        return cls(required, True)

    @classmethod
    def between(cls, required: int, maximum: int) -> Arity:
        return cls(required, True, maximum)

    @classmethod
    def from_encoded(cls, encoded: int) -> Arity:
        if encoded < 0:
            return cls(abs(encoded) - 1, True)
        return cls(encoded, False)

    @classmethod
    def of(cls, func: Callable[..., Any]) -> Arity:
        """Inspect ``func`` and return its arity.

        Positional parameters without a default count as required. A
        ``*args`` parameter or any defaulted positional parameter makes the
        arity variadic; without ``*args`` the positional parameter count is
        the upper bound. Callables without an introspectable signature (some
        builtins) accept anything.

        Raises:
            TypeError: If ``func`` is not callable, or has a required
                keyword-only parameter and so cannot be called positionally.
        """
        if not callable(func):
            raise TypeError(f"Flag evaluator must be callable, got {func!r}")
        try:
            sig = inspect.signature(func)
        except (TypeError, ValueError):
            return cls.at_least(0)

        required = 0
        optional = 0
        var_positional = False
        for param in sig.parameters.values():
            if param.kind in _POSITIONAL:
                if param.default is inspect.Parameter.empty:
                    required += 1
                else:
                    optional += 1
            elif param.kind == inspect.Parameter.VAR_POSITIONAL:
                var_positional = True
            elif (
                param.kind == inspect.Parameter.KEYWORD_ONLY
                and param.default is inspect.Parameter.empty
            ):
                raise TypeError(
                    f"Flag evaluator {func!r} requires keyword-only argument "
                    f"'{param.name}' and cannot be called positionally"
                )
        if var_positional:
            return cls.at_least(required)
        if optional:
            return cls.between(required, required + optional)
        return cls.fixed(required)

    @property
    def encoded(self) -> int:
        """Signed arity: ``n`` when fixed, ``-(n + 1)`` when variadic."""
        return -(self.required + 1) if self.variadic else self.required

    def accepts(self, count: int) -> bool:
        if not self.variadic:
            return count == self.required
        if self.maximum is not None and count > self.maximum:
            return False
        return count >= self.required

    def describe(self) -> str:
        if self.variadic and self.maximum is not None:
            return f"{self.required} to {self.maximum}"
        if self.variadic:
            return f"{self.required} or more"
        return str(self.required)


__all__ = ["Arity"]
