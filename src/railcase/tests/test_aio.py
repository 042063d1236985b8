"""Tests for async operators and the AsyncResult / AsyncOption pipelines."""

from __future__ import annotations

import asyncio

import pytest

from railcase.foundation.errors import ArgumentInvalidError, ArgumentNullError, InvalidOperationError
from railcase.monads import (
    AsyncOption,
    AsyncResult,
    Err,
    Ok,
    Option,
    Result,
    VoidResult,
    ensure_async,
    get_value_or_else_async,
    inspect_try_async,
    map_async,
    map_option_async,
    match_async,
    match_option_async,
    on_failure_async,
    on_success_try_async,
    switch_async,
    then_async,
    then_result_async,
    then_void_async,
    to_result_async,
    to_void_async,
    try_fn_async,
    where_async,
    where_option_async,
)


async def pending(value: object) -> object:
    """A result that only becomes available after a scheduler round-trip."""
    await asyncio.sleep(0)
    return value


# ─────────────────────────────────────────────────────────────────────────────
# Chaining
# ─────────────────────────────────────────────────────────────────────────────


class TestChaining:
    """map/then/where/ensure over pending sources."""

    @pytest.mark.asyncio
    async def test_then_async_on_pending_success(self) -> None:
        """Pending success of 42 chains into an async continuation."""
        async def describe(x: int) -> Result[str]:
            return await pending(Ok(f"Value: {x}"))  # type: ignore[return-value]

        assert await then_async(pending(Ok(42)), describe) == Ok("Value: 42")

    @pytest.mark.asyncio
    async def test_then_async_on_pending_failure_skips_continuation(self) -> None:
        error = ValueError("upstream")
        called = False

        async def describe(x: int) -> Result[str]:
            nonlocal called
            called = True
            return Ok(str(x))

        result = await then_async(pending(Err(error)), describe)
        assert result.error is error
        assert not called

    @pytest.mark.asyncio
    async def test_map_async_accepts_sync_and_async_selectors(self) -> None:
        async def double(x: int) -> int:
            return x * 2

        assert await map_async(Ok(5), double) == Ok(10)
        assert await map_async(pending(Ok(5)), lambda x: x + 1) == Ok(6)
        assert await map_async(VoidResult.success(), lambda: "made") == Ok("made")

    @pytest.mark.asyncio
    async def test_map_async_captures_awaited_exception(self) -> None:
        async def explode(_: int) -> int:
            await asyncio.sleep(0)
            raise RuntimeError("late failure")

        assert isinstance((await map_async(Ok(1), explode)).error, RuntimeError)

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self) -> None:
        async def cancelled(_: int) -> int:
            raise asyncio.CancelledError

        with pytest.raises(asyncio.CancelledError):
            await map_async(Ok(1), cancelled)

    @pytest.mark.asyncio
    async def test_then_keeps_family(self) -> None:
        void = await then_async(VoidResult.success(), lambda: VoidResult.success())
        assert isinstance(void, VoidResult)
        with pytest.raises(TypeError):
            await then_async(Ok(1), lambda x: VoidResult.success())

    @pytest.mark.asyncio
    async def test_cross_family_binds(self) -> None:
        async def save(_: int) -> VoidResult:
            return VoidResult.success()

        assert (await then_void_async(pending(Ok(1)), save)).is_success
        assert await then_result_async(pending(VoidResult.success()), lambda: Ok("loaded")) == Ok("loaded")
        error = KeyError("k")
        assert (await then_result_async(VoidResult.fail(error), lambda: Ok(1))).error is error

    @pytest.mark.asyncio
    async def test_where_async(self) -> None:
        error = ValueError("negative")

        async def positive(x: int) -> bool:
            return x > 0

        assert await where_async(Ok(3), positive, error) == Ok(3)
        assert (await where_async(Ok(-3), positive, error)).error is error

    @pytest.mark.asyncio
    async def test_ensure_async_with_async_factory(self) -> None:
        async def make_error(x: int) -> Exception:
            return ValueError(f"{x} rejected")

        result = await ensure_async(pending(Ok(7)), lambda x: x < 5, make_error)
        assert str(result.error) == "7 rejected"
        message_result = await ensure_async(Ok(7), lambda x: x < 5, "too big")
        assert isinstance(message_result.error, InvalidOperationError)

    @pytest.mark.asyncio
    async def test_none_arguments_raise_before_awaiting(self) -> None:
        with pytest.raises(ArgumentNullError):
            await map_async(Ok(1), None)  # type: ignore[arg-type]
        with pytest.raises(ArgumentNullError):
            AsyncResult(Ok(1)).then(None)  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_non_result_source_is_rejected(self) -> None:
        with pytest.raises(ArgumentInvalidError):
            await map_async(pending(3), lambda x: x)  # type: ignore[arg-type]


# ─────────────────────────────────────────────────────────────────────────────
# Projection, branching, inspection
# ─────────────────────────────────────────────────────────────────────────────


class TestBranching:
    @pytest.mark.asyncio
    async def test_match_async(self) -> None:
        async def on_ok(x: int) -> str:
            return f"ok {x}"

        assert await match_async(pending(Ok(1)), on_ok, lambda e: "err") == "ok 1"
        assert await match_async(Err(ValueError("v")), on_ok, lambda e: str(e)) == "v"

    @pytest.mark.asyncio
    async def test_match_async_propagates(self) -> None:
        async def explode(_: int) -> str:
            raise RuntimeError("projection")

        with pytest.raises(RuntimeError):
            await match_async(Ok(1), explode, lambda e: "err")

    @pytest.mark.asyncio
    async def test_switch_async_callback_error_handler(self) -> None:
        handled: list[Exception] = []

        async def explode(_: int) -> None:
            raise RuntimeError("side effect")

        async def handle(exc: Exception) -> None:
            handled.append(exc)

        await switch_async(Ok(1), explode, lambda e: None, handle)
        assert isinstance(handled[0], RuntimeError)

    @pytest.mark.asyncio
    async def test_switch_any_async_erases_value(self) -> None:
        seen: list[str] = []

        async def on_ok() -> None:
            seen.append("ok")

        await Ok(5).switch_any_async(on_ok, lambda e: None)
        await VoidResult.success().switch_any_async(on_ok, lambda e: None)
        assert seen == ["ok", "ok"]

    @pytest.mark.asyncio
    async def test_inspection(self) -> None:
        seen: list[object] = []
        error = ValueError("x")
        assert (await on_failure_async(Err(error), seen.append)).error is error
        assert seen == [error]

        async def explode(_: object) -> None:
            raise RuntimeError("hook")

        assert isinstance((await on_success_try_async(Ok(1), explode)).error, RuntimeError)
        assert (await inspect_try_async(Err(error), explode)).error is error

    @pytest.mark.asyncio
    async def test_to_void_and_try_fn(self) -> None:
        assert (await to_void_async(pending(Ok(1)))).is_success

        async def fetch(x: int) -> int:
            return x + 1

        async def broken() -> int:
            raise ConnectionError("down")

        assert await try_fn_async(fetch, 1) == Ok(2)
        assert await try_fn_async(int, "42") == Ok(42)
        assert isinstance((await try_fn_async(int, "x")).error, ValueError)
        assert isinstance((await try_fn_async(broken)).error, ConnectionError)


# ─────────────────────────────────────────────────────────────────────────────
# Fluent pipelines
# ─────────────────────────────────────────────────────────────────────────────


class TestAsyncResult:
    @pytest.mark.asyncio
    async def test_pipeline(self) -> None:
        async def load(x: int) -> Result[str]:
            return Ok(f"Value: {x}")

        result = await (
            AsyncResult(pending(Ok(42)))
            .ensure(lambda x: x > 0, "positive")
            .then(load)
            .map(str.upper)
        )
        assert result == Ok("VALUE: 42")

    @pytest.mark.asyncio
    async def test_pipeline_is_lazy(self) -> None:
        calls: list[int] = []
        pipeline = AsyncResult(Ok(1)).on_success(calls.append)
        assert calls == []
        await pipeline
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_failure_short_circuits_pipeline(self) -> None:
        error = TimeoutError("slow")
        calls: list[str] = []
        result = await (
            AsyncResult(pending(Err(error)))
            .map(lambda x: calls.append("map"))
            .on_failure(lambda e: calls.append("failure"))
        )
        assert result.error is error
        assert calls == ["failure"]

    @pytest.mark.asyncio
    async def test_terminal_match(self) -> None:
        assert await AsyncResult(Ok(2)).map(lambda x: x * 3).match(lambda x: x, lambda e: 0) == 6

    @pytest.mark.asyncio
    async def test_branches_share_one_run(self) -> None:
        """Steps run once even when a pipeline is branched and awaited repeatedly."""
        calls: list[int] = []

        def double(x: int) -> int:
            calls.append(x)
            return x * 2

        base = AsyncResult(pending(Ok(3))).map(double)
        left = base.map(str)
        right = base.map(lambda x: x + 1)
        assert await left == Ok("6")
        assert await right == Ok(7)
        assert await base == Ok(6)
        assert await base == Ok(6)
        assert calls == [3]

    @pytest.mark.asyncio
    async def test_unawaited_branch_runs_nothing(self) -> None:
        calls: list[int] = []
        base = AsyncResult(Ok(1))
        base.on_success(calls.append)
        assert await base.map(lambda x: x + 1) == Ok(2)
        assert calls == []


class TestAsyncOption:
    @pytest.mark.asyncio
    async def test_operators(self) -> None:
        async def find(key: str) -> Option[int]:
            return Option.of({"a": 1}.get(key))

        assert await map_option_async(find("a"), lambda x: x + 1) == Option.of(2)
        assert (await where_option_async(find("a"), lambda x: x > 5)).is_empty
        assert await match_option_async(find("b"), lambda x: x, lambda: "none") == "none"
        assert await get_value_or_else_async(find("b"), lambda: 0) == 0

    @pytest.mark.asyncio
    async def test_to_result_async_lazy_error(self) -> None:
        calls = 0

        async def make_error() -> Exception:
            nonlocal calls
            calls += 1
            return LookupError("missing")

        assert await to_result_async(pending(Option.of(3)), make_error) == Ok(3)
        assert calls == 0
        assert isinstance((await to_result_async(Option.empty(), make_error)).error, LookupError)
        assert calls == 1

    @pytest.mark.asyncio
    async def test_fluent(self) -> None:
        option = AsyncOption(pending(Option.of("hello")))
        assert await option.map(len).get_value_or_default(0) == 5
        result = await AsyncOption(Option.empty()).to_result(KeyError("none"))
        assert isinstance(result.error, KeyError)
