"""Result types for railway-oriented error handling.

Two outcome types share one contract:
- Result[T]: success carrying a value, or failure carrying an Exception
- VoidResult: success without a value, or failure carrying an Exception

Chaining operators (map, then, where, ensure) short-circuit on failure without
calling caller code and keep the original error object. Exceptions raised by
caller code inside a chaining operator become the new failure. Projection
(match) and the plain inspection operators let exceptions propagate; the
*_try variants capture them.

Contract violations (None where a callable or error is required, blank
messages) are raised immediately and never captured.

Notes:
    - Uses __slots__ and read-only properties; instances never change after construction
    - VoidResult.success() returns one shared instance
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator
from typing import Generic, Self, TypeVar, cast

from railcase.foundation.config import try_get_settings
from railcase.foundation.errors import (
    AggregateFailure,
    ArgumentInvalidError,
    ArgumentNullError,
    InvalidOperationError,
    classify_exception,
    require_exception,
    require_not_blank,
    require_not_none,
)
from railcase.runtime.observability.logging import get_logger

from .types import UNIT, ErrorSelector, Unit, maybe_await

T = TypeVar("T")  # Success type
U = TypeVar("U")  # Mapped success type
R = TypeVar("R")  # Projection type

_log = get_logger("railcase.monads")

ErrorSpec = str | Exception | Callable[..., Exception]


# ═════════════════════════════════════════════════════════════════════════════
# Internal helpers
# ═════════════════════════════════════════════════════════════════════════════


def _captured(exc: Exception, operation: str) -> Exception:
    """Record that an operator turned exc into a failure, return exc unchanged.

    Invalid settings never prevent the failure from being returned.
    """
    settings = try_get_settings()
    enabled = settings.log_captured_errors if settings is not None else True
    if enabled and _log.is_enabled_for(logging.DEBUG):
        _log.debug("exception captured as failure", operation=operation,
                   error_type=type(exc).__name__, code=classify_exception(exc).value, error=str(exc))
    return exc


def _select(exc: Exception, selector: ErrorSelector | None, operation: str) -> Exception:
    """Apply the optional error selector; a None selection keeps the original exception."""
    chosen = selector(exc) if selector is not None else None
    return _captured(chosen if chosen is not None else exc, operation)


def _error_source(error: ErrorSpec | None, name: str) -> Callable[..., Exception]:
    """Normalize the error argument of ensure() into a factory.

    - str: non-blank message wrapped in InvalidOperationError
    - Exception: used as-is
    - callable: lazy factory, called only when the check fails
    """
    if error is None:
        raise ArgumentNullError(name)
    if isinstance(error, str):
        message = require_not_blank(error, name)
        return lambda *_: InvalidOperationError(message)
    if isinstance(error, Exception):
        return lambda *_: error
    if callable(error):
        return error
    raise ArgumentInvalidError(name, "expected an error message, an Exception or an error factory")


def _expect(out: object, kind: type, operation: str) -> None:
    if not isinstance(out, kind):
        raise TypeError(f"{operation}() continuation must return a {kind.__name__}, got {type(out).__name__}")


def _render_error(error: Exception) -> str:
    return f"Fail({type(error).__name__}: {error})"


# ═════════════════════════════════════════════════════════════════════════════
# Shared base
# ═════════════════════════════════════════════════════════════════════════════


class _ResultBase:
    """Error-side state and operators common to Result and VoidResult."""

    __slots__ = ("_error",)

    _error: Exception | None

    @classmethod
    def fail(cls, error: Exception) -> Self:
        raise NotImplementedError

    # ─── Type Checking ───────────────────────────────────────────────

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> Exception | None:
        """The failure's error, None on success."""
        return self._error

    def try_get_error(self) -> tuple[bool, Exception | None]:
        """(True, error) on failure, (False, None) on success."""
        return (True, self._error) if self._error is not None else (False, None)

    # ─── Failure-side Inspection ─────────────────────────────────────

    def on_failure(self, action: Callable[[Exception], None]) -> Self:
        """Call action with the error on failure. Exceptions propagate. Returns self."""
        require_not_none(action, "action")
        if self._error is not None:
            action(self._error)
        return self

    def on_failure_try(self, action: Callable[[Exception], None], error_selector: ErrorSelector | None = None) -> Self:
        """Like on_failure, but an exception from action becomes the new failure."""
        require_not_none(action, "action")
        if self._error is None:
            return self
        try:
            action(self._error)
        except Exception as exc:
            return self.fail(_select(exc, error_selector, "on_failure_try"))
        return self

    def inspect(self, action: Callable[[Self], None]) -> Self:
        """Call action with self regardless of state. Exceptions propagate. Returns self."""
        require_not_none(action, "action")
        action(self)
        return self

    def inspect_try(self, action: Callable[[Self], None], error_selector: ErrorSelector | None = None) -> Self:
        """Call action with self; if it raises, a success becomes a failure and a failure stays as it was."""
        require_not_none(action, "action")
        try:
            action(self)
        except Exception as exc:
            if self._error is not None:
                return self
            return self.fail(_select(exc, error_selector, "inspect_try"))
        return self

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __bool__(self) -> bool:
        """True if success."""
        return self._error is None


# ═════════════════════════════════════════════════════════════════════════════
# Result[T]
# ═════════════════════════════════════════════════════════════════════════════


class Result(_ResultBase, Generic[T]):
    """Success carrying a non-None value, or failure carrying an Exception.

    Examples:
        >>> Result.success(5).map(lambda x: x * 2)
        Success(10)
        >>> Result.fail(ValueError("bad")).map(lambda x: x * 2)
        Fail(ValueError: bad)

        Railway-oriented programming:
        >>> (
        ...     Ok(10)
        ...     .ensure(lambda x: x > 0, "positive")
        ...     .ensure(lambda x: x < 100, "small")
        ...     .then(lambda x: Ok(f"Value: {x}"))
        ... )
        Success(Value: 10)
    """

    __slots__ = ("_value",)
    __match_args__ = ("value", "error")

    def __init__(self, value: T | None, error: Exception | None) -> None:
        """Private constructor. Use Result.success()/Result.fail() or Ok()/Err() instead."""
        if (value is None) == (error is None):
            raise InvalidOperationError("Result must carry exactly one of value or error")
        self._value = value
        self._error = error

    # ─── Construction ────────────────────────────────────────────────

    @classmethod
    def success(cls, value: T) -> Result[T]:
        """Successful result. Raises ArgumentNullError if value is None."""
        return cls(require_not_none(value, "value"), None)

    @classmethod
    def fail(cls, error: Exception) -> Result[T]:
        """Failed result. Raises ArgumentNullError if error is None."""
        return cls(None, require_exception(error))

    @classmethod
    def lift(cls, obj: T | Exception) -> Result[T]:
        """An Exception becomes a failure, any other value a success."""
        if isinstance(obj, Exception):
            return cls.fail(obj)
        return cls.success(obj)

    # ─── Value Extraction ────────────────────────────────────────────

    @property
    def value(self) -> T | None:
        """The success value, None on failure."""
        return self._value

    def get_value(self) -> T | None:
        """Erased accessor shared with VoidResult."""
        return self._value

    def try_get_value(self) -> tuple[bool, T | None]:
        """(True, value) on success, (False, None) on failure."""
        return (True, self._value) if self._error is None else (False, None)

    def deconstruct(self) -> tuple[bool, T | None, Exception | None]:
        """(is_success, value, error)."""
        return (self._error is None, self._value, self._error)

    # ─── Functor / Monad ─────────────────────────────────────────────

    def map(self, selector: Callable[[T], U]) -> Result[U]:
        """Transform the success value. An exception from selector becomes the failure.

        Type signature: Result[T] -> (T -> U) -> Result[U]
        """
        require_not_none(selector, "selector")
        if self._error is not None:
            return cast(Result[U], self)
        try:
            return Result.success(selector(cast(T, self._value)))
        except Exception as exc:
            return Result.fail(_captured(exc, "map"))

    def then(self, selector: Callable[[T], Result[U]]) -> Result[U]:
        """Monadic bind - chain an operation that can fail.

        Type signature: Result[T] -> (T -> Result[U]) -> Result[U]

        Example:
            >>> def parse_int(s: str) -> Result[int]:
            ...     return Ok(int(s))
            >>> Ok("42").then(parse_int).then(lambda n: Ok(n + 1))
            Success(43)
        """
        require_not_none(selector, "selector")
        if self._error is not None:
            return cast(Result[U], self)
        try:
            out = selector(cast(T, self._value))
        except Exception as exc:
            return Result.fail(_captured(exc, "then"))
        _expect(out, Result, "then")
        return out

    def then_void(self, selector: Callable[[T], VoidResult]) -> VoidResult:
        """Chain into an operation that produces no value."""
        require_not_none(selector, "selector")
        if self._error is not None:
            return VoidResult.fail(self._error)
        try:
            out = selector(cast(T, self._value))
        except Exception as exc:
            return VoidResult.fail(_captured(exc, "then_void"))
        _expect(out, VoidResult, "then_void")
        return out

    # ─── Validation ──────────────────────────────────────────────────

    def where(self, predicate: Callable[[T], bool], error: Exception) -> Result[T]:
        """Keep the success if predicate holds, else fail with error."""
        require_not_none(predicate, "predicate")
        require_exception(error)
        if self._error is not None:
            return self
        try:
            return self if predicate(cast(T, self._value)) else Result.fail(error)
        except Exception as exc:
            return Result.fail(_captured(exc, "where"))

    def ensure(self, predicate: Callable[[T], bool], error: str | Exception | Callable[[T], Exception]) -> Result[T]:
        """Keep the success if predicate holds, else fail.

        error may be a message (wrapped in InvalidOperationError), a fixed
        Exception, or a factory called once with the value and only when the
        predicate returns False. If predicate raises, that exception is the
        failure and the factory is not called.
        """
        require_not_none(predicate, "predicate")
        factory = _error_source(error, "error")
        if self._error is not None:
            return self
        value = cast(T, self._value)
        try:
            if predicate(value):
                return self
            return Result.fail(factory(value))
        except Exception as exc:
            return Result.fail(_captured(exc, "ensure"))

    # ─── Pattern Matching ────────────────────────────────────────────

    def match(self, on_success: Callable[[T], R], on_failure: Callable[[Exception], R]) -> R:
        """Project into a plain value by calling exactly one branch. Exceptions propagate."""
        require_not_none(on_success, "on_success")
        require_not_none(on_failure, "on_failure")
        if self._error is None:
            return on_success(cast(T, self._value))
        return on_failure(self._error)

    def switch(
        self,
        on_success: Callable[[T], None],
        on_failure: Callable[[Exception], None],
        on_callback_error: Callable[[Exception], None] | None = None,
    ) -> None:
        """Run exactly one branch for its side effects.

        If the branch raises, the exception is re-raised unless on_callback_error
        is given, in which case it receives the exception instead.
        """
        require_not_none(on_success, "on_success")
        require_not_none(on_failure, "on_failure")
        try:
            if self._error is None:
                on_success(cast(T, self._value))
            else:
                on_failure(self._error)
        except Exception as exc:
            if on_callback_error is None:
                raise
            on_callback_error(exc)

    async def switch_async(
        self,
        on_success: Callable[[T], Awaitable[None] | None],
        on_failure: Callable[[Exception], Awaitable[None] | None],
        on_callback_error: Callable[[Exception], Awaitable[None] | None] | None = None,
    ) -> None:
        """Async switch: awaits whichever branch runs (and on_callback_error)."""
        require_not_none(on_success, "on_success")
        require_not_none(on_failure, "on_failure")
        try:
            if self._error is None:
                await maybe_await(on_success(cast(T, self._value)))
            else:
                await maybe_await(on_failure(self._error))
        except Exception as exc:
            if on_callback_error is None:
                raise
            await maybe_await(on_callback_error(exc))

    def switch_any(
        self,
        on_success: Callable[[], None],
        on_failure: Callable[[Exception], None],
        on_callback_error: Callable[[Exception], None] | None = None,
    ) -> None:
        """switch() with a success callback that ignores the value."""
        require_not_none(on_success, "on_success")
        self.switch(lambda _: on_success(), on_failure, on_callback_error)

    async def switch_any_async(
        self,
        on_success: Callable[[], Awaitable[None] | None],
        on_failure: Callable[[Exception], Awaitable[None] | None],
        on_callback_error: Callable[[Exception], Awaitable[None] | None] | None = None,
    ) -> None:
        require_not_none(on_success, "on_success")
        await self.switch_async(lambda _: on_success(), on_failure, on_callback_error)

    # ─── Success-side Inspection ─────────────────────────────────────

    def on_success(self, action: Callable[[T], None]) -> Result[T]:
        """Call action with the value on success. Exceptions propagate. Returns self."""
        require_not_none(action, "action")
        if self._error is None:
            action(cast(T, self._value))
        return self

    def on_success_try(self, action: Callable[[T], None], error_selector: ErrorSelector | None = None) -> Result[T]:
        """Like on_success, but an exception from action turns the success into a failure."""
        require_not_none(action, "action")
        if self._error is not None:
            return self
        try:
            action(cast(T, self._value))
        except Exception as exc:
            return Result.fail(_select(exc, error_selector, "on_success_try"))
        return self

    # ─── Conversion ──────────────────────────────────────────────────

    def to_void(self) -> VoidResult:
        """Drop the value: success -> VoidResult.success(), failure keeps its error."""
        if self._error is None:
            return VoidResult.success()
        return VoidResult.fail(self._error)

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __iter__(self) -> Iterator[object]:
        """Unpack as (is_success, value, error)."""
        return iter(self.deconstruct())

    def __repr__(self) -> str:
        if self._error is None:
            return f"Success({self._value})"
        return _render_error(self._error)

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        """Structural equality: same state and equal payload."""
        if not isinstance(other, Result):
            return NotImplemented
        return self._error == other._error and self._value == other._value

    def __hash__(self) -> int:
        """Hashable only when the value is, like a tuple: hash(Ok([1])) raises TypeError."""
        return hash((self._error is None, self._value, self._error))


# ═════════════════════════════════════════════════════════════════════════════
# VoidResult
# ═════════════════════════════════════════════════════════════════════════════


class VoidResult(_ResultBase):
    """Success without a value, or failure carrying an Exception.

    Converts losslessly to and from Result[Unit].

    Example:
        >>> VoidResult.success().map(lambda: 42)
        Success(42)
        >>> VoidResult.fail(KeyError("id")).then(lambda: VoidResult.success())
        Fail(KeyError: 'id')
    """

    __slots__ = ()
    __match_args__ = ("error",)

    def __init__(self, error: Exception | None = None) -> None:
        """Private constructor. Use VoidResult.success()/VoidResult.fail() instead."""
        self._error = require_exception(error) if error is not None else None

    # ─── Construction ────────────────────────────────────────────────

    @classmethod
    def success(cls) -> VoidResult:
        """The shared success instance."""
        return _VOID_SUCCESS

    @classmethod
    def fail(cls, error: Exception) -> VoidResult:
        """Failed result. Raises ArgumentNullError if error is None."""
        return cls(require_exception(error))

    @classmethod
    def from_result(cls, result: Result[Unit]) -> VoidResult:
        """Inverse of to_result(): success -> success, failure keeps its error."""
        require_not_none(result, "result")
        return result.to_void()

    def get_value(self) -> None:
        """Erased accessor; a VoidResult never carries a value."""
        return None

    # ─── Functor / Monad ─────────────────────────────────────────────

    def map(self, factory: Callable[[], U]) -> Result[U]:
        """Lift a success into Result[U] using factory. An exception from factory becomes the failure."""
        require_not_none(factory, "factory")
        if self._error is not None:
            return Result.fail(self._error)
        try:
            return Result.success(factory())
        except Exception as exc:
            return Result.fail(_captured(exc, "map"))

    def then(self, next_: Callable[[], VoidResult]) -> VoidResult:
        """Chain another value-less step."""
        require_not_none(next_, "next_")
        if self._error is not None:
            return self
        try:
            out = next_()
        except Exception as exc:
            return VoidResult.fail(_captured(exc, "then"))
        _expect(out, VoidResult, "then")
        return out

    def then_result(self, next_: Callable[[], Result[U]]) -> Result[U]:
        """Chain into a step that produces a value."""
        require_not_none(next_, "next_")
        if self._error is not None:
            return Result.fail(self._error)
        try:
            out = next_()
        except Exception as exc:
            return Result.fail(_captured(exc, "then_result"))
        _expect(out, Result, "then_result")
        return out

    # ─── Validation ──────────────────────────────────────────────────

    def where(self, predicate: Callable[[], bool], error: Exception) -> VoidResult:
        """Keep the success if predicate holds, else fail with error."""
        require_not_none(predicate, "predicate")
        require_exception(error)
        if self._error is not None:
            return self
        try:
            return self if predicate() else VoidResult.fail(error)
        except Exception as exc:
            return VoidResult.fail(_captured(exc, "where"))

    def ensure(self, predicate: Callable[[], bool], error: str | Exception | Callable[[], Exception]) -> VoidResult:
        """Keep the success if predicate holds, else fail with a message, an Exception or a lazily built error."""
        require_not_none(predicate, "predicate")
        factory = _error_source(error, "error")
        if self._error is not None:
            return self
        try:
            if predicate():
                return self
            return VoidResult.fail(factory())
        except Exception as exc:
            return VoidResult.fail(_captured(exc, "ensure"))

    # ─── Pattern Matching ────────────────────────────────────────────

    def match(self, on_success: Callable[[], R], on_failure: Callable[[Exception], R]) -> R:
        """Project into a plain value by calling exactly one branch. Exceptions propagate."""
        require_not_none(on_success, "on_success")
        require_not_none(on_failure, "on_failure")
        if self._error is None:
            return on_success()
        return on_failure(self._error)

    def switch(
        self,
        on_success: Callable[[], None],
        on_failure: Callable[[Exception], None],
        on_callback_error: Callable[[Exception], None] | None = None,
    ) -> None:
        """Run exactly one branch; a raising branch is re-raised unless on_callback_error is given."""
        require_not_none(on_success, "on_success")
        require_not_none(on_failure, "on_failure")
        try:
            if self._error is None:
                on_success()
            else:
                on_failure(self._error)
        except Exception as exc:
            if on_callback_error is None:
                raise
            on_callback_error(exc)

    async def switch_async(
        self,
        on_success: Callable[[], Awaitable[None] | None],
        on_failure: Callable[[Exception], Awaitable[None] | None],
        on_callback_error: Callable[[Exception], Awaitable[None] | None] | None = None,
    ) -> None:
        require_not_none(on_success, "on_success")
        require_not_none(on_failure, "on_failure")
        try:
            if self._error is None:
                await maybe_await(on_success())
            else:
                await maybe_await(on_failure(self._error))
        except Exception as exc:
            if on_callback_error is None:
                raise
            await maybe_await(on_callback_error(exc))

    switch_any = switch
    switch_any_async = switch_async

    # ─── Success-side Inspection ─────────────────────────────────────

    def on_success(self, action: Callable[[], None]) -> VoidResult:
        """Call action on success. Exceptions propagate. Returns self."""
        require_not_none(action, "action")
        if self._error is None:
            action()
        return self

    def on_success_try(self, action: Callable[[], None], error_selector: ErrorSelector | None = None) -> VoidResult:
        """Like on_success, but an exception from action turns the success into a failure."""
        require_not_none(action, "action")
        if self._error is not None:
            return self
        try:
            action()
        except Exception as exc:
            return VoidResult.fail(_select(exc, error_selector, "on_success_try"))
        return self

    # ─── Conversion ──────────────────────────────────────────────────

    def to_result(self) -> Result[Unit]:
        """Lossless conversion to Result[Unit]."""
        if self._error is None:
            return Result.success(UNIT)
        return Result.fail(self._error)

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __repr__(self) -> str:
        return "Success" if self._error is None else _render_error(self._error)

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VoidResult):
            return NotImplemented
        return self._error == other._error

    def __hash__(self) -> int:
        return hash((self._error is None, self._error))


_VOID_SUCCESS = VoidResult()


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def Ok(value: T) -> Result[T]:  # noqa: N802
    """Construct a successful Result.

    Type signature: T -> Result[T]
    """
    return Result.success(value)


def Err(error: Exception) -> Result[T]:  # noqa: N802
    """Construct a failed Result.

    Type signature: Exception -> Result[T]
    """
    return Result.fail(error)


def try_fn(fn: Callable[..., T], *args: object, **kwargs: object) -> Result[T]:
    """Call fn and capture its outcome: return value -> success, exception -> failure.

    Example:
        >>> try_fn(int, "42")
        Success(42)
        >>> try_fn(int, "x")
        Fail(ValueError: invalid literal for int() with base 10: 'x')
    """
    require_not_none(fn, "fn")
    try:
        return Result.success(fn(*args, **kwargs))
    except Exception as exc:
        return Result.fail(_captured(exc, "try_fn"))


# ═════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═════════════════════════════════════════════════════════════════════════════


def sequence(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Convert Results to a Result of list. Fails fast on the first failure.

    Type signature: [Result[T]] -> Result[[T]]

    Example:
        >>> sequence([Ok(1), Ok(2), Ok(3)])
        Success([1, 2, 3])
    """
    values: list[T] = []
    for result in results:
        if result._error is not None:
            return cast(Result[list[T]], result)
        values.append(cast(T, result._value))
    return Result.success(values)


def traverse(items: Iterable[T], f: Callable[[T], Result[U]]) -> Result[list[U]]:
    """Map f over items and sequence, stopping at the first failure (later items are not visited).

    Type signature: [T] -> (T -> Result[U]) -> Result[[U]]
    """
    require_not_none(f, "f")
    values: list[U] = []
    for item in items:
        result = f(item)
        if result._error is not None:
            return cast(Result[list[U]], result)
        values.append(cast(U, result._value))
    return Result.success(values)


def collect_results(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Collect all Results without failing fast.

    Success with every value, or a failure whose AggregateFailure carries every error.

    Example:
        >>> r = collect_results([Ok(1), Err(ValueError("a")), Err(KeyError("b"))])
        >>> [type(e).__name__ for e in r.error.errors]
        ['ValueError', 'KeyError']
    """
    values: list[T] = []
    errors: list[Exception] = []
    for result in results:
        if result._error is None:
            values.append(cast(T, result._value))
        else:
            errors.append(result._error)
    return Result.fail(AggregateFailure(errors)) if errors else Result.success(values)
