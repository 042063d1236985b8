"""Option type: a value that may be absent.

Option[T] is either present (has_value, carries a non-None value) or empty.
Option.of(None) and the zero value Option() both equal the canonical
Option.empty().

Unlike Result, no Option operator captures exceptions raised by caller
functions; they propagate. Every function argument is checked for None before
anything runs.

Example:
    >>> Option.of("hello").map(len).get_value_or_default(0)
    5
    >>> Option.empty().get_value_or_default(0)
    0
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar, cast

from railcase.foundation.errors import ArgumentInvalidError, InvalidStateError, require_not_none

from .result import Result

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class Option(Generic[T]):
    """Present value or nothing.

    Notes:
        - map() treats a None return from the selector as "empty", not an error
        - Equality: both empty, or both present with equal values
    """

    __slots__ = ("_value",)
    __match_args__ = ("has_value", "value_or_none")

    def __init__(self, value: T | None = None) -> None:
        """Zero value is empty. Prefer Option.of()/Option.empty()."""
        self._value = value

    # ─── Construction ────────────────────────────────────────────────

    @classmethod
    def of(cls, value: T | None) -> Option[T]:
        """Present if value is not None, else the canonical empty instance."""
        return cast(Option[T], _EMPTY) if value is None else cls(value)

    @classmethod
    def empty(cls) -> Option[T]:
        """The canonical empty instance."""
        return cast(Option[T], _EMPTY)

    # ─── Inspection ──────────────────────────────────────────────────

    @property
    def has_value(self) -> bool:
        return self._value is not None

    @property
    def is_empty(self) -> bool:
        return self._value is None

    @property
    def value(self) -> T:
        """The contained value. Raises InvalidStateError when empty."""
        if self._value is None:
            raise InvalidStateError("Option has no value.")
        return self._value

    @property
    def value_or_none(self) -> T | None:
        return self._value

    def try_get_value(self) -> tuple[bool, T | None]:
        """(True, value) when present, (False, None) when empty."""
        return (self._value is not None, self._value)

    def deconstruct(self) -> tuple[bool, T | None]:
        """(has_value, value)."""
        return (self._value is not None, self._value)

    # ─── Functor / Monad ─────────────────────────────────────────────

    def map(self, selector: Callable[[T], U | None]) -> Option[U]:
        """Option.of(selector(value)); a None return gives empty."""
        require_not_none(selector, "selector")
        if self._value is None:
            return cast(Option[U], _EMPTY)
        return Option.of(selector(self._value))

    def then(self, selector: Callable[[T], Option[U]]) -> Option[U]:
        """Chain an operation that may itself produce nothing."""
        require_not_none(selector, "selector")
        if self._value is None:
            return cast(Option[U], _EMPTY)
        return selector(self._value)

    def where(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Keep the value if predicate holds, else empty. Predicate is not called when empty."""
        require_not_none(predicate, "predicate")
        if self._value is not None and predicate(self._value):
            return self
        return cast(Option[T], _EMPTY)

    # ─── Pattern Matching ────────────────────────────────────────────

    def match(self, on_value: Callable[[T], R], on_empty: Callable[[], R]) -> R:
        require_not_none(on_value, "on_value")
        require_not_none(on_empty, "on_empty")
        if self._value is not None:
            return on_value(self._value)
        return on_empty()

    def switch(self, on_value: Callable[[T], None], on_empty: Callable[[], None]) -> None:
        require_not_none(on_value, "on_value")
        require_not_none(on_empty, "on_empty")
        if self._value is not None:
            on_value(self._value)
        else:
            on_empty()

    # ─── Extraction ──────────────────────────────────────────────────

    def get_value_or_default(self, default: T) -> T:
        return self._value if self._value is not None else default

    def get_value_or_else(self, factory: Callable[[], T]) -> T:
        """Value, or factory() when empty (factory is not called when present)."""
        require_not_none(factory, "factory")
        return self._value if self._value is not None else factory()

    def get_value_or_none(self) -> T | None:
        return self._value

    # ─── Conversion ──────────────────────────────────────────────────

    def to_result(self, error: Exception | Callable[[], Exception]) -> Result[T]:
        """Success with the value, or failure with error.

        error may be an Exception or a factory; the factory is only called when empty.
        """
        require_not_none(error, "error")
        if not isinstance(error, Exception) and not callable(error):
            raise ArgumentInvalidError("error", "expected an Exception or an error factory")
        if self._value is not None:
            return Result.success(self._value)
        return Result.fail(error if isinstance(error, Exception) else error())

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self._value is not None

    def __iter__(self) -> Iterator[object]:
        """Unpack as (has_value, value)."""
        return iter(self.deconstruct())

    def __repr__(self) -> str:
        return f"HasValue({self._value})" if self._value is not None else "IsEmpty"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((self._value is not None, self._value))


_EMPTY: Option[object] = Option()


def Some(value: T) -> Option[T]:  # noqa: N802
    """Present Option. Raises ArgumentNullError if value is None."""
    return Option(require_not_none(value, "value"))


NOTHING: Option[object] = _EMPTY
