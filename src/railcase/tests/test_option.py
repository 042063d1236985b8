"""Tests for Option[T]."""

from __future__ import annotations

import pytest

from railcase.foundation.errors import ArgumentInvalidError, ArgumentNullError, InvalidStateError
from railcase.monads import NOTHING, Ok, Option, Some


class TestConstruction:
    """Presence rules and the canonical empty instance."""

    def test_of_none_is_empty(self) -> None:
        assert Option.of(None) == Option.empty()
        assert not Option.of(None).has_value
        assert Option.of(None) is Option.empty()

    def test_zero_value_is_empty(self) -> None:
        assert Option() == Option.empty()
        assert Option().is_empty

    def test_of_value(self) -> None:
        option = Option.of("hello")
        assert option.has_value
        assert option.value == "hello"

    def test_falsy_values_are_present(self) -> None:
        """Only None means absent."""
        assert Option.of(0).has_value
        assert Option.of("").has_value

    def test_some_rejects_none(self) -> None:
        assert Some(3) == Option.of(3)
        with pytest.raises(ArgumentNullError):
            Some(None)

    def test_value_on_empty_raises(self) -> None:
        with pytest.raises(InvalidStateError):
            _ = Option.empty().value

    def test_accessors(self) -> None:
        assert Option.of(2).try_get_value() == (True, 2)
        assert Option.empty().try_get_value() == (False, None)
        has_value, value = Option.of("v")
        assert has_value and value == "v"
        assert Option.empty().value_or_none is None
        assert Option.of(1).get_value_or_none() == 1


class TestOperators:
    """map/then/where and extraction."""

    def test_map_then_default(self) -> None:
        assert Option.of("hello").map(len).get_value_or_default(0) == 5
        assert Option.empty().get_value_or_default(0) == 0

    def test_map_returning_none_is_empty(self) -> None:
        assert Option.of(1).map(lambda _: None) == Option.empty()

    def test_map_on_empty_skips_selector(self) -> None:
        called = False

        def selector(x: int) -> int:
            nonlocal called
            called = True
            return x

        assert Option.empty().map(selector).is_empty
        assert not called

    def test_then(self) -> None:
        assert Option.of(4).then(lambda x: Option.of(x / 2)) == Option.of(2.0)
        assert Option.of(4).then(lambda _: Option.empty()).is_empty

    def test_where(self) -> None:
        assert Option.of(4).where(lambda x: x > 3) == Option.of(4)
        assert Option.of(2).where(lambda x: x > 3).is_empty

    def test_exceptions_propagate(self) -> None:
        def explode(_: int) -> int:
            raise RuntimeError("no capture")

        with pytest.raises(RuntimeError):
            Option.of(1).map(explode)

    def test_none_callable_is_contract_violation(self) -> None:
        with pytest.raises(ArgumentNullError):
            Option.empty().map(None)  # type: ignore[arg-type]

    def test_match_and_switch(self) -> None:
        assert Option.of(3).match(lambda x: x + 1, lambda: 0) == 4
        assert Option.empty().match(lambda x: x, lambda: "none") == "none"
        seen: list[str] = []
        Option.empty().switch(lambda x: seen.append("value"), lambda: seen.append("empty"))
        assert seen == ["empty"]

    def test_get_value_or_else_is_lazy(self) -> None:
        def fail() -> int:
            raise AssertionError("factory must not run")

        assert Option.of(1).get_value_or_else(fail) == 1
        assert Option.empty().get_value_or_else(lambda: 9) == 9


class TestConversion:
    """to_result with eager and lazy errors."""

    def test_empty_to_result_carries_error(self) -> None:
        error = LookupError("missing")
        assert Option.empty().to_result(error).error is error

    def test_present_to_result_never_builds_error(self) -> None:
        calls = 0

        def make_error() -> Exception:
            nonlocal calls
            calls += 1
            return LookupError("missing")

        assert Option.of(5).to_result(make_error) == Ok(5)
        assert calls == 0
        assert isinstance(Option.empty().to_result(make_error).error, LookupError)
        assert calls == 1

    def test_to_result_rejects_bad_error(self) -> None:
        with pytest.raises(ArgumentNullError):
            Option.of(1).to_result(None)  # type: ignore[arg-type]
        with pytest.raises(ArgumentInvalidError):
            Option.of(1).to_result("message")  # type: ignore[arg-type]


class TestEquality:
    def test_equality_and_strings(self) -> None:
        assert Option.of(1) == Option.of(1)
        assert Option.of(1) != Option.of(2)
        assert Option.of(1) != Option.empty()
        assert NOTHING == Option.empty()
        assert hash(Option.of("a")) == hash(Option.of("a"))
        assert str(Option.of(1)) == "HasValue(1)"
        assert str(Option.empty()) == "IsEmpty"

    def test_pattern_matching(self) -> None:
        match Option.of("x"):
            case Option(True, value):
                found = value
            case _:
                found = None
        assert found == "x"
