"""Tests for simple_flag.arity."""

import functools

import pytest

from simple_flag.arity import Arity


class TestArityOf:
    """Arity computed from callable signatures."""

    def test_no_arguments(self):
        assert Arity.of(lambda: True) == Arity.fixed(0)

    def test_fixed_arguments(self):
        assert Arity.of(lambda a, b: True) == Arity.fixed(2)

    def test_var_positional(self):
        assert Arity.of(lambda a, b, *c: True) == Arity.at_least(2)

    def test_defaulted_positional_is_bounded_variadic(self):
        assert Arity.of(lambda a, b=1: True) == Arity.between(1, 2)

    def test_defaulted_positional_with_var_positional_is_unbounded(self):
        assert Arity.of(lambda a, b=1, *rest: True) == Arity.at_least(1)

    def test_keyword_only_with_default_ignored(self):
        assert Arity.of(lambda a, *, debug=False: True) == Arity.fixed(1)

    def test_var_keyword_ignored(self):
        assert Arity.of(lambda a, **kwargs: True) == Arity.fixed(1)

    def test_required_keyword_only_rejected(self):
        with pytest.raises(TypeError, match="'user_id'"):
            Arity.of(lambda *, user_id: True)

    def test_bound_method_excludes_self(self):
        class Checker:
            def enabled(self, user_id):
                return True

        assert Arity.of(Checker().enabled) == Arity.fixed(1)

    def test_partial(self):
        def evaluator(a, b):
            return a == b

        assert Arity.of(functools.partial(evaluator, 1)) == Arity.fixed(1)

    def test_callable_object(self):
        class Evaluator:
            def __call__(self, request):
                return True

        assert Arity.of(Evaluator()) == Arity.fixed(1)

    def test_not_callable(self):
        with pytest.raises(TypeError, match="must be callable"):
            Arity.of("not callable")


class TestEncoding:
    @pytest.mark.parametrize(
        "arity, encoded",
        [
            (Arity.fixed(0), 0),
            (Arity.fixed(2), 2),
            (Arity.at_least(0), -1),
            (Arity.at_least(2), -3),
        ],
    )
    def test_encoded(self, arity, encoded):
        assert arity.encoded == encoded
        assert Arity.from_encoded(encoded) == arity


class TestAccepts:
    def test_fixed(self):
        arity = Arity.fixed(1)
        assert not arity.accepts(0)
        assert arity.accepts(1)
        assert not arity.accepts(2)

    def test_variadic(self):
        arity = Arity.at_least(2)
        assert not arity.accepts(1)
        assert arity.accepts(2)
        assert arity.accepts(10)

    def test_bounded(self):
        arity = Arity.between(1, 2)
        assert not arity.accepts(0)
        assert arity.accepts(1)
        assert arity.accepts(2)
        assert not arity.accepts(3)

    def test_describe(self):
        assert Arity.fixed(3).describe() == "3"
        assert Arity.at_least(3).describe() == "3 or more"
        assert Arity.between(1, 3).describe() == "1 to 3"

    def test_bounded_encodes_as_variadic(self):
        assert Arity.between(1, 2).encoded == -2
