"""Asynchronous operators for Result, VoidResult and Option.

One coroutine per operator. Every coroutine accepts either an already
resolved value or anything awaitable that produces one (coroutine, Task,
Future), and every callback may return a plain value or an awaitable.

Rules shared by all operators:
1. The source is awaited first when it is pending.
2. The synchronous branching rules apply unchanged.
3. An awaitable continuation is awaited before the operator resolves; for
   map/then/where/ensure and the *_try operators an exception raised while
   doing so becomes the failure.
4. match/switch/on_success/on_failure/inspect let callback exceptions propagate.

Only Exception subclasses are captured. asyncio.CancelledError always
propagates so task cancellation keeps working.

Fluent use goes through AsyncResult / AsyncOption:

    >>> async def find_id() -> Result[int]:
    ...     return Ok(42)
    >>> async def load(x: int) -> Result[str]:
    ...     return Ok(f"Value: {x}")
    >>> await AsyncResult(find_id()).then(load).map(str.upper)
    Success(VALUE: 42)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Generator
from typing import Any, Generic, TypeVar, cast

from railcase.foundation.errors import ArgumentInvalidError, require_exception, require_not_none

from .option import Option
from .result import Result, VoidResult, _captured, _error_source, _expect, _select
from .types import ErrorSelector, maybe_await

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

AnyResult = Result[Any] | VoidResult
ResultSource = AnyResult | Awaitable[AnyResult]
OptionSource = Option[Any] | Awaitable[Option[Any]]


# ═════════════════════════════════════════════════════════════════════════════
# Internal helpers
# ═════════════════════════════════════════════════════════════════════════════


async def _resolve(source: ResultSource) -> AnyResult:
    require_not_none(source, "source")
    resolved = await maybe_await(source)
    if not isinstance(resolved, (Result, VoidResult)):
        raise ArgumentInvalidError("source", f"expected a Result or VoidResult, got {type(resolved).__name__}")
    return resolved


async def _resolve_option(source: OptionSource) -> Option[Any]:
    require_not_none(source, "source")
    resolved = await maybe_await(source)
    if not isinstance(resolved, Option):
        raise ArgumentInvalidError("source", f"expected an Option, got {type(resolved).__name__}")
    return resolved


def _args(result: AnyResult) -> tuple[Any, ...]:
    """Positional arguments for a success callback: the value, or nothing for VoidResult."""
    return () if isinstance(result, VoidResult) else (result.value,)


# ═════════════════════════════════════════════════════════════════════════════
# Chaining
# ═════════════════════════════════════════════════════════════════════════════


async def map_async(source: ResultSource, selector: Callable[..., Any]) -> Result[Any]:
    """Transform the success value (VoidResult: call a zero-argument factory) into a Result.

    selector may be async. Exceptions become the failure.
    """
    require_not_none(selector, "selector")
    result = await _resolve(source)
    if result.is_failure:
        return Result.fail(cast(Exception, result.error))
    try:
        return Result.success(await maybe_await(selector(*_args(result))))
    except Exception as exc:
        return Result.fail(_captured(exc, "map_async"))


async def then_async(source: ResultSource, selector: Callable[..., Any]) -> AnyResult:
    """Bind within the same family: Result -> Result, VoidResult -> VoidResult."""
    require_not_none(selector, "selector")
    result = await _resolve(source)
    if result.is_failure:
        return result
    kind = type(result)
    try:
        out = await maybe_await(selector(*_args(result)))
    except Exception as exc:
        return kind.fail(_captured(exc, "then_async"))
    _expect(out, kind, "then_async")
    return out


async def then_void_async(source: Result[T] | Awaitable[Result[T]], selector: Callable[[T], Any]) -> VoidResult:
    """Result -> VoidResult: chain into a step that produces no value."""
    require_not_none(selector, "selector")
    result = await _resolve(source)
    if result.is_failure:
        return VoidResult.fail(cast(Exception, result.error))
    try:
        out = await maybe_await(selector(*_args(result)))
    except Exception as exc:
        return VoidResult.fail(_captured(exc, "then_void_async"))
    _expect(out, VoidResult, "then_void_async")
    return out


async def then_result_async(source: VoidResult | Awaitable[VoidResult], selector: Callable[[], Any]) -> Result[Any]:
    """VoidResult -> Result: chain into a step that produces a value."""
    require_not_none(selector, "selector")
    result = await _resolve(source)
    if result.is_failure:
        return Result.fail(cast(Exception, result.error))
    try:
        out = await maybe_await(selector(*_args(result)))
    except Exception as exc:
        return Result.fail(_captured(exc, "then_result_async"))
    _expect(out, Result, "then_result_async")
    return out


async def where_async(source: ResultSource, predicate: Callable[..., Any], error: Exception) -> AnyResult:
    """Keep the success if the (possibly async) predicate holds, else fail with error."""
    require_not_none(predicate, "predicate")
    require_exception(error)
    result = await _resolve(source)
    if result.is_failure:
        return result
    try:
        return result if await maybe_await(predicate(*_args(result))) else type(result).fail(error)
    except Exception as exc:
        return type(result).fail(_captured(exc, "where_async"))


async def ensure_async(
    source: ResultSource,
    predicate: Callable[..., Any],
    error: str | Exception | Callable[..., Any],
) -> AnyResult:
    """Keep the success if the predicate holds, else fail.

    error is a message, an Exception or a factory (sync or async) called with
    the value only when the predicate returns False.
    """
    require_not_none(predicate, "predicate")
    factory = _error_source(error, "error")
    result = await _resolve(source)
    if result.is_failure:
        return result
    args = _args(result)
    try:
        if await maybe_await(predicate(*args)):
            return result
        return type(result).fail(await maybe_await(factory(*args)))
    except Exception as exc:
        return type(result).fail(_captured(exc, "ensure_async"))


# ═════════════════════════════════════════════════════════════════════════════
# Projection & Branching
# ═════════════════════════════════════════════════════════════════════════════


async def match_async(source: ResultSource, on_success: Callable[..., Any], on_failure: Callable[[Exception], Any]) -> Any:
    """Await exactly one branch and return its result. Exceptions propagate."""
    require_not_none(on_success, "on_success")
    require_not_none(on_failure, "on_failure")
    result = await _resolve(source)
    if result.is_success:
        return await maybe_await(on_success(*_args(result)))
    return await maybe_await(on_failure(cast(Exception, result.error)))


async def switch_async(
    source: ResultSource,
    on_success: Callable[..., Any],
    on_failure: Callable[[Exception], Any],
    on_callback_error: Callable[[Exception], Any] | None = None,
) -> None:
    """Await exactly one branch for its side effects; see Result.switch for on_callback_error."""
    require_not_none(on_success, "on_success")
    require_not_none(on_failure, "on_failure")
    result = await _resolve(source)
    await result.switch_async(on_success, on_failure, on_callback_error)


# ═════════════════════════════════════════════════════════════════════════════
# Inspection
# ═════════════════════════════════════════════════════════════════════════════


async def on_success_async(source: ResultSource, action: Callable[..., Any]) -> AnyResult:
    """Run action (sync or async) on success. Exceptions propagate."""
    require_not_none(action, "action")
    result = await _resolve(source)
    if result.is_success:
        await maybe_await(action(*_args(result)))
    return result


async def on_success_try_async(
    source: ResultSource, action: Callable[..., Any], error_selector: ErrorSelector | None = None
) -> AnyResult:
    """Run action on success; an exception turns the success into a failure."""
    require_not_none(action, "action")
    result = await _resolve(source)
    if result.is_failure:
        return result
    try:
        await maybe_await(action(*_args(result)))
    except Exception as exc:
        return type(result).fail(_select(exc, error_selector, "on_success_try_async"))
    return result


async def on_failure_async(source: ResultSource, action: Callable[[Exception], Any]) -> AnyResult:
    """Run action (sync or async) with the error on failure. Exceptions propagate."""
    require_not_none(action, "action")
    result = await _resolve(source)
    if result.is_failure:
        await maybe_await(action(cast(Exception, result.error)))
    return result


async def on_failure_try_async(
    source: ResultSource, action: Callable[[Exception], Any], error_selector: ErrorSelector | None = None
) -> AnyResult:
    """Run action on failure; an exception from it becomes the new failure."""
    require_not_none(action, "action")
    result = await _resolve(source)
    if result.is_success:
        return result
    try:
        await maybe_await(action(cast(Exception, result.error)))
    except Exception as exc:
        return type(result).fail(_select(exc, error_selector, "on_failure_try_async"))
    return result


async def inspect_async(source: ResultSource, action: Callable[[Any], Any]) -> AnyResult:
    """Run action with the resolved result regardless of state. Exceptions propagate."""
    require_not_none(action, "action")
    result = await _resolve(source)
    await maybe_await(action(result))
    return result


async def inspect_try_async(
    source: ResultSource, action: Callable[[Any], Any], error_selector: ErrorSelector | None = None
) -> AnyResult:
    """Like inspect_async; if action raises, a success becomes a failure and a failure is kept."""
    require_not_none(action, "action")
    result = await _resolve(source)
    try:
        await maybe_await(action(result))
    except Exception as exc:
        if result.is_failure:
            return result
        return type(result).fail(_select(exc, error_selector, "inspect_try_async"))
    return result


async def to_void_async(source: Result[Any] | Awaitable[Result[Any]]) -> VoidResult:
    """Drop the value of a pending Result."""
    result = await _resolve(source)
    return result if isinstance(result, VoidResult) else result.to_void()


async def try_fn_async(fn: Callable[..., Awaitable[T] | T], *args: object, **kwargs: object) -> Result[T]:
    """Call fn(*args, **kwargs), awaiting the return value if needed, and capture the outcome as a Result."""
    require_not_none(fn, "fn")
    try:
        return Result.success(await maybe_await(fn(*args, **kwargs)))
    except Exception as exc:
        return Result.fail(_captured(exc, "try_fn_async"))


# ═════════════════════════════════════════════════════════════════════════════
# Option operators (no exception capture, as in Option itself)
# ═════════════════════════════════════════════════════════════════════════════


async def map_option_async(source: OptionSource, selector: Callable[[Any], Any]) -> Option[Any]:
    require_not_none(selector, "selector")
    option = await _resolve_option(source)
    if option.is_empty:
        return Option.empty()
    return Option.of(await maybe_await(selector(option.value)))


async def then_option_async(source: OptionSource, selector: Callable[[Any], Any]) -> Option[Any]:
    require_not_none(selector, "selector")
    option = await _resolve_option(source)
    if option.is_empty:
        return Option.empty()
    out = await maybe_await(selector(option.value))
    _expect(out, Option, "then_option_async")
    return out


async def where_option_async(source: OptionSource, predicate: Callable[[Any], Any]) -> Option[Any]:
    require_not_none(predicate, "predicate")
    option = await _resolve_option(source)
    if option.has_value and await maybe_await(predicate(option.value)):
        return option
    return Option.empty()


async def match_option_async(source: OptionSource, on_value: Callable[[Any], Any], on_empty: Callable[[], Any]) -> Any:
    require_not_none(on_value, "on_value")
    require_not_none(on_empty, "on_empty")
    option = await _resolve_option(source)
    if option.has_value:
        return await maybe_await(on_value(option.value))
    return await maybe_await(on_empty())


async def switch_option_async(source: OptionSource, on_value: Callable[[Any], Any], on_empty: Callable[[], Any]) -> None:
    await match_option_async(source, on_value, on_empty)


async def get_value_or_else_async(source: OptionSource, factory: Callable[[], Any]) -> Any:
    """Value, or the (possibly async) factory's result when empty."""
    require_not_none(factory, "factory")
    option = await _resolve_option(source)
    return option.value if option.has_value else await maybe_await(factory())


async def to_result_async(source: OptionSource, error: Exception | Callable[[], Any]) -> Result[Any]:
    """Success with the value, or failure with error (a factory is awaited and only called when empty)."""
    require_not_none(error, "error")
    if not isinstance(error, Exception) and not callable(error):
        raise ArgumentInvalidError("error", "expected an Exception or an error factory")
    option = await _resolve_option(source)
    if option.has_value:
        return Result.success(option.value)
    return Result.fail(error if isinstance(error, Exception) else await maybe_await(error()))


# ═════════════════════════════════════════════════════════════════════════════
# Fluent wrappers
# ═════════════════════════════════════════════════════════════════════════════


class _Pipeline:
    """Awaitable that runs its step at most once, on first await, and shares the outcome.

    Nothing is scheduled until the first await; later awaits (and every branch
    chained from this pipeline) reuse the same future.
    """

    __slots__ = ("_source", "_step", "_future")

    def __init__(self, source: Any) -> None:
        self._source = require_not_none(source, "source")
        self._step: Callable[[], Awaitable[Any]] | None = None
        self._future: asyncio.Future[Any] | None = None

    @classmethod
    def _after(cls, step: Callable[[], Awaitable[Any]]) -> Any:
        pipeline = cls.__new__(cls)
        pipeline._source, pipeline._step, pipeline._future = None, step, None
        return pipeline

    def _start(self) -> Awaitable[Any]:
        raise NotImplementedError

    def __await__(self) -> Generator[Any, None, Any]:
        if self._future is None:
            self._future = asyncio.ensure_future(self._step() if self._step is not None else self._start())
        return self._future.__await__()


class AsyncResult(_Pipeline, Generic[T]):
    """Awaitable pipeline over a pending Result or VoidResult.

    Each method validates its arguments immediately and returns a new
    AsyncResult; nothing runs until a pipeline is awaited, then every step
    completes before the next one starts. A pipeline may be awaited more than
    once and branched into several pipelines; its steps still run once.

    Example:
        >>> async def double(x: int) -> int:
        ...     return x * 2
        >>> await AsyncResult(Ok(21)).map(double).ensure(lambda x: x > 0, "positive")
        Success(42)
    """

    __slots__ = ()

    def __init__(self, source: ResultSource) -> None:
        super().__init__(source)

    def _start(self) -> Awaitable[AnyResult]:
        return _resolve(self._source)

    # ─── Chaining ────────────────────────────────────────────────────

    def map(self, selector: Callable[..., Any]) -> AsyncResult[Any]:
        require_not_none(selector, "selector")
        return AsyncResult._after(lambda: map_async(self, selector))

    def then(self, selector: Callable[..., Any]) -> AsyncResult[Any]:
        require_not_none(selector, "selector")
        return AsyncResult._after(lambda: then_async(self, selector))

    def then_void(self, selector: Callable[[T], Any]) -> AsyncResult[None]:
        require_not_none(selector, "selector")
        return AsyncResult._after(lambda: then_void_async(self, selector))

    def then_result(self, selector: Callable[[], Any]) -> AsyncResult[Any]:
        require_not_none(selector, "selector")
        return AsyncResult._after(lambda: then_result_async(self, selector))

    def where(self, predicate: Callable[..., Any], error: Exception) -> AsyncResult[T]:
        require_not_none(predicate, "predicate")
        require_exception(error)
        return AsyncResult._after(lambda: where_async(self, predicate, error))

    def ensure(self, predicate: Callable[..., Any], error: str | Exception | Callable[..., Any]) -> AsyncResult[T]:
        require_not_none(predicate, "predicate")
        _error_source(error, "error")
        return AsyncResult._after(lambda: ensure_async(self, predicate, error))

    # ─── Inspection ──────────────────────────────────────────────────

    def on_success(self, action: Callable[..., Any]) -> AsyncResult[T]:
        require_not_none(action, "action")
        return AsyncResult._after(lambda: on_success_async(self, action))

    def on_success_try(self, action: Callable[..., Any], error_selector: ErrorSelector | None = None) -> AsyncResult[T]:
        require_not_none(action, "action")
        return AsyncResult._after(lambda: on_success_try_async(self, action, error_selector))

    def on_failure(self, action: Callable[[Exception], Any]) -> AsyncResult[T]:
        require_not_none(action, "action")
        return AsyncResult._after(lambda: on_failure_async(self, action))

    def on_failure_try(self, action: Callable[[Exception], Any], error_selector: ErrorSelector | None = None) -> AsyncResult[T]:
        require_not_none(action, "action")
        return AsyncResult._after(lambda: on_failure_try_async(self, action, error_selector))

    def inspect(self, action: Callable[[Any], Any]) -> AsyncResult[T]:
        require_not_none(action, "action")
        return AsyncResult._after(lambda: inspect_async(self, action))

    def inspect_try(self, action: Callable[[Any], Any], error_selector: ErrorSelector | None = None) -> AsyncResult[T]:
        require_not_none(action, "action")
        return AsyncResult._after(lambda: inspect_try_async(self, action, error_selector))

    def to_void(self) -> AsyncResult[None]:
        return AsyncResult._after(lambda: to_void_async(self))

    # ─── Terminal operators ──────────────────────────────────────────

    async def match(self, on_success: Callable[..., Any], on_failure: Callable[[Exception], Any]) -> Any:
        return await match_async(self, on_success, on_failure)

    async def switch(
        self,
        on_success: Callable[..., Any],
        on_failure: Callable[[Exception], Any],
        on_callback_error: Callable[[Exception], Any] | None = None,
    ) -> None:
        await switch_async(self, on_success, on_failure, on_callback_error)


class AsyncOption(_Pipeline, Generic[T]):
    """Awaitable pipeline over a pending Option. Callback exceptions propagate."""

    __slots__ = ()

    def __init__(self, source: OptionSource) -> None:
        super().__init__(source)

    def _start(self) -> Awaitable[Option[Any]]:
        return _resolve_option(self._source)

    def map(self, selector: Callable[[T], Any]) -> AsyncOption[Any]:
        require_not_none(selector, "selector")
        return AsyncOption._after(lambda: map_option_async(self, selector))

    def then(self, selector: Callable[[T], Any]) -> AsyncOption[Any]:
        require_not_none(selector, "selector")
        return AsyncOption._after(lambda: then_option_async(self, selector))

    def where(self, predicate: Callable[[T], Any]) -> AsyncOption[T]:
        require_not_none(predicate, "predicate")
        return AsyncOption._after(lambda: where_option_async(self, predicate))

    async def match(self, on_value: Callable[[T], Any], on_empty: Callable[[], Any]) -> Any:
        return await match_option_async(self, on_value, on_empty)

    async def switch(self, on_value: Callable[[T], Any], on_empty: Callable[[], Any]) -> None:
        await switch_option_async(self, on_value, on_empty)

    async def get_value_or_default(self, default: T) -> T:
        return (await self).get_value_or_default(default)

    async def get_value_or_else(self, factory: Callable[[], Any]) -> T:
        return await get_value_or_else_async(self, factory)

    def to_result(self, error: Exception | Callable[[], Any]) -> AsyncResult[T]:
        require_not_none(error, "error")
        return AsyncResult._after(lambda: to_result_async(self, error))
