"""Feature flag registry with arity-checked evaluators and test overrides.

A flag is a name bound to an evaluator: any callable whose result decides
whether the feature is on. Evaluators may take arguments (a user id, a
request) and may return any value; truthiness is left to the caller.

Manifesto:
    Feature toggles in application code should stay boring:
    - **Plain callables:** A flag is a function, not a config schema
    - **Fail loud:** Calling a flag with the wrong argument count raises
    - **Undefined is off:** Asking about an unknown flag returns ``False``
    - **Test friendly:** Overrides swap evaluators and restore them exactly

Architecture:
    ::

        ┌────────────────────────────────────────────────────────────────┐
        │                         FlagRegistry                           │
        │  ┌──────────────────────────────────────────────────────────┐  │
        │  │ _flags:     dict[name, FlagEvaluator]   (current)        │  │
        │  │ _overrides: dict[name, FlagEvaluator]   (pre-override)   │  │
        │  │ env:        label fixed at construction                  │  │
        │  └──────────────────────────────────────────────────────────┘  │
        └────────────────────────────────────────────────────────────────┘
                 │ is_active(name, *args)
                 ▼
        lookup (fallback: always False) ─► Arity.accepts(len(args))
                 │                              │ no
                 ▼ yes                          ▼
        evaluator(*args) → raw result     FlagArgumentsMismatch

Examples:
    Configuration:

    >>> FEATURES = FlagRegistry(env="production", setup=lambda f: (
    ...     f.define("new_user_profile", lambda user_id: user_id in BETA_USERS),
    ...     f.define("third_party_analytics", lambda: not f.env_matches("production")),
    ... ))

    Usage:

    >>> if FEATURES.is_active("new_user_profile", user.id):
    ...     render_new_profile(user)

    Testing with a scoped override:

    >>> with FEATURES.override_with("new_user_profile", True):
    ...     assert FEATURES.is_active("new_user_profile", 42)

Guardrails:
    - Not thread-safe: define flags at startup, override only in tests
    - Overrides are single level; reset before overriding again
    - ``override_with`` never touches the override bookkeeping

Tags:
    feature-flags, feature-toggle, registry, testing, simple-flag
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Hashable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .arity import Arity
from .errors import (
    FlagAlreadyDefined,
    FlagArgumentsMismatch,
    FlagNotDefined,
    FlagNotOverridden,
)
from .logging import get_logger

if TYPE_CHECKING:
    from .settings import FlagSettings

logger = get_logger(__name__)


@dataclass(frozen=True)
class FlagEvaluator:
    """A flag callable paired with the arity computed when it was registered."""

    func: Callable[..., Any]
    arity: Arity

    @classmethod
    def wrap(cls, func: Callable[..., Any]) -> FlagEvaluator:
        return cls(func, Arity.of(func))

    @classmethod
    def constant(cls, result: Any) -> FlagEvaluator:
        """Evaluator accepting any arguments and always returning ``result``."""
        return cls(lambda *_args: result, Arity.at_least(0))

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)


_UNDEFINED = FlagEvaluator.constant(False)


def _label(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class FlagRegistry:
    """Registry of named feature flags.

    Args:
        env: Optional environment label, compared by ``env_matches``.
        setup: Optional callable invoked with the new registry so flags can
            be defined inline.
    """

    def __init__(
        self,
        env: Any = None,
        setup: Callable[[FlagRegistry], Any] | None = None,
    ):
        self._env = env
        self._flags: dict[Hashable, FlagEvaluator] = {}
        self._overrides: dict[Hashable, FlagEvaluator] = {}
        if setup is not None:
            setup(self)

    @classmethod
    def from_settings(
        cls,
        settings: FlagSettings | None = None,
        setup: Callable[[FlagRegistry], Any] | None = None,
    ) -> FlagRegistry:
        """Build a registry whose ``env`` comes from ``FlagSettings``."""
        from .settings import get_settings

        settings = settings or get_settings()
        return cls(env=settings.env, setup=setup)

    @property
    def env(self) -> Any:
        return self._env

    # ------------------------------------------------------------------
    # Definition
    # ------------------------------------------------------------------

    def define(self, name: Hashable, evaluator: Callable[..., Any]) -> None:
        """Register ``evaluator`` under ``name``.

        Raises:
            FlagAlreadyDefined: If ``name`` is already defined.
            TypeError: If ``evaluator`` cannot be called positionally.
        """
        if self.flag_defined(name):
            raise FlagAlreadyDefined(name)

        self._flags[name] = FlagEvaluator.wrap(evaluator)
        logger.debug("flag_defined", flag=name, arity=self._flags[name].arity.encoded)

    def flag(self, name: Hashable) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of ``define``.

        Example:
            >>> @features.flag("new_parser")
            ... def new_parser(source):
            ...     return source.startswith("edgar")
        """

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.define(name, func)
            return func

        return decorator

    def redefine(self, name: Hashable, evaluator: Callable[..., Any]) -> None:
        """Assign ``evaluator`` to ``name`` whether or not it is defined.

        Overrides are left alone: resetting an override still restores the
        evaluator saved when the override was made.
        """
        self._flags[name] = FlagEvaluator.wrap(evaluator)
        logger.debug("flag_redefined", flag=name, arity=self._flags[name].arity.encoded)

    def list_flags(self) -> list[Hashable]:
        """Names of all defined flags, in definition order."""
        return list(self._flags)

    @property
    def flags(self) -> list[Hashable]:
        return self.list_flags()

    def flag_defined(self, name: Hashable) -> bool:
        return name in self._flags

    def __contains__(self, name: Hashable) -> bool:
        return self.flag_defined(name)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def is_active(self, name: Hashable, *args: Any) -> Any:
        """Evaluate flag ``name`` with ``args`` and return the raw result.

        Undefined flags evaluate to ``False`` for any arguments.

        Raises:
            FlagArgumentsMismatch: If ``len(args)`` does not fit the
                evaluator's arity.
        """
        evaluator = self._flags.get(name, _UNDEFINED)
        if not evaluator.arity.accepts(len(args)):
            raise FlagArgumentsMismatch(name, evaluator.arity.describe(), len(args))
        return evaluator(*args)

    is_enabled = is_active
    is_on = is_active

    def is_inactive(self, name: Hashable, *args: Any) -> bool:
        return not self.is_active(name, *args)

    is_disabled = is_inactive
    is_off = is_inactive

    def presence(self, name: Hashable, *args: Any) -> Any:
        """Return the flag result when truthy, otherwise ``None``."""
        return self.is_active(name, *args) or None

    def with_flag(self, name: Hashable, block: Callable[[], Any], *args: Any) -> Any:
        """Call ``block()`` only when the flag is active and return its result."""
        if self.is_active(name, *args):
            return block()
        return None

    def gate(
        self,
        name: Hashable,
        *args: Any,
        fallback: Any = None,
        disabled_error: type[Exception] | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator running the wrapped function only while the flag is active.

        The flag is evaluated with ``args`` on every call. When inactive, the
        decorated function raises ``disabled_error`` if given, else returns
        ``fallback``.

        Example:
            >>> @features.gate("experimental", fallback="disabled")
            ... def experimental_feature():
            ...     return "enabled"
        """

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            @functools.wraps(func)
            def wrapper(*call_args: Any, **call_kwargs: Any) -> Any:
                if self.is_active(name, *args):
                    return func(*call_args, **call_kwargs)
                if disabled_error is not None:
                    raise disabled_error(f"Feature '{name}' is disabled")
                return fallback

            return wrapper

        return decorator

    def env_matches(self, *candidates: Any) -> bool:
        """True if any candidate equals the environment label.

        Both sides are compared as strings; enum members compare by value,
        so ``"production"`` and ``Env.PRODUCTION`` match alike.
        """
        if self._env is None:
            return False
        return _label(self._env) in {_label(c) for c in candidates}

    # ------------------------------------------------------------------
    # Overrides
    # ------------------------------------------------------------------

    def override(
        self,
        name: Hashable,
        result: Any = True,
        evaluator: Callable[..., Any] | None = None,
    ) -> Callable[..., Any]:
        """Replace flag ``name`` until ``reset_override`` is called.

        Without ``evaluator`` the flag returns ``result`` for any arguments.
        With one, it must take exactly as many arguments as the original
        evaluator requires.

        Returns:
            The evaluator that was active before the override.

        Raises:
            FlagNotDefined: If ``name`` is not defined.
            FlagAlreadyDefined: If ``name`` is already overridden.
            FlagArgumentsMismatch: If ``evaluator`` has a different arity.
        """
        if not self.flag_defined(name):
            raise FlagNotDefined(name)
        if self.overridden(name):
            raise FlagAlreadyDefined(name, f"Feature flag `{name}` is already overridden")

        original = self._flags[name]
        if evaluator is not None:
            replacement = FlagEvaluator.wrap(evaluator)
            if replacement.arity.encoded != original.arity.required:
                raise FlagArgumentsMismatch(
                    name, str(original.arity.required), replacement.arity.describe()
                )
        else:
            replacement = FlagEvaluator.constant(result)

        self._overrides[name] = original
        self._flags[name] = replacement
        logger.debug("flag_overridden", flag=name, custom_evaluator=evaluator is not None)
        return original.func

    def reset_override(self, name: Hashable) -> None:
        """Restore the evaluator saved by ``override``.

        Raises:
            FlagNotOverridden: If ``name`` has no active override.
        """
        if not self.overridden(name):
            raise FlagNotOverridden(name)

        self._flags[name] = self._overrides.pop(name)
        logger.debug("flag_override_reset", flag=name)

    def reset_all_overrides(self) -> None:
        for name in list(self._overrides):
            self.reset_override(name)

    @contextmanager
    def override_with(self, name: Hashable, result: Any = True) -> Iterator[FlagRegistry]:
        """Make flag ``name`` return ``result`` for the duration of a ``with`` block.

        Unlike ``override`` this is not recorded as an override, so it nests
        freely. The previous evaluator is restored however the block exits,
        wherever the scoped evaluator sits at that point: an ``override`` made
        inside the block stays active and later resets to the pre-block
        evaluator, while a ``redefine`` or ``reset_override`` inside the block
        is kept.

        Raises:
            FlagNotDefined: If ``name`` is not defined.
        """
        if not self.flag_defined(name):
            raise FlagNotDefined(name)

        original = self._flags[name]
        scoped = FlagEvaluator.constant(result)
        self._flags[name] = scoped
        logger.debug("flag_scoped_override_entered", flag=name)
        try:
            yield self
        finally:
            if self._flags.get(name) is scoped:
                self._flags[name] = original
            elif self._overrides.get(name) is scoped:
                self._overrides[name] = original
            logger.debug("flag_scoped_override_exited", flag=name)

    def overridden(self, name: Hashable) -> bool:
        return name in self._overrides

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(env={self._env!r}, flags={len(self._flags)}, "
            f"overrides={len(self._overrides)})"
        )


__all__ = ["FlagEvaluator", "FlagRegistry"]
