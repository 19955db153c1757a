"""simple-flag: an in-process feature flag registry.

Named toggles backed by plain callables, arity-checked at call time, with
single-level overrides and scoped overrides for tests.

Example:
    >>> from simple_flag import FlagRegistry
    >>> features = FlagRegistry(env="staging")
    >>> features.define("beta_search", lambda user_id: user_id % 2 == 0)
    >>> features.is_active("beta_search", 4)
    True
"""

from .arity import Arity
from .errors import (
    FlagAlreadyDefined,
    FlagArgumentsMismatch,
    FlagError,
    FlagNotDefined,
    FlagNotOverridden,
)
from .registry import FlagEvaluator, FlagRegistry

__version__ = "0.1.0"

__all__ = [
    "Arity",
    "FlagAlreadyDefined",
    "FlagArgumentsMismatch",
    "FlagError",
    "FlagEvaluator",
    "FlagNotDefined",
    "FlagNotOverridden",
    "FlagRegistry",
    "__version__",
]
