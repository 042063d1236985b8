"""Shared types for the monadic wrappers: Unit, capability protocols, await helpers."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Final, Protocol, TypeAlias, TypeVar, runtime_checkable

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

ErrorSelector: TypeAlias = Callable[[Exception], "Exception | None"]


class Unit:
    """Zero-information placeholder, the value of a successful Result[Unit].

    Every Unit is equal to every other; use the UNIT singleton.
    """

    __slots__ = ()
    _instance: Unit | None = None

    def __new__(cls) -> Unit:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Unit)

    def __hash__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "()"

    __str__ = __repr__


UNIT: Final[Unit] = Unit()


@runtime_checkable
class ResultLike(Protocol):
    """Capability shared by Result and VoidResult.

    Lets callers branch on success/failure without knowing whether a value is carried.
    switch_any/switch_any_async take a success callback with no arguments.
    """

    @property
    def is_success(self) -> bool: ...

    @property
    def is_failure(self) -> bool: ...

    @property
    def error(self) -> Exception | None: ...

    def get_value(self) -> object | None: ...

    def switch_any(
        self,
        on_success: Callable[[], None],
        on_failure: Callable[[Exception], None],
        on_callback_error: Callable[[Exception], None] | None = None,
    ) -> None: ...

    async def switch_any_async(
        self,
        on_success: Callable[[], Awaitable[None] | None],
        on_failure: Callable[[Exception], Awaitable[None] | None],
        on_callback_error: Callable[[Exception], Awaitable[None] | None] | None = None,
    ) -> None: ...


@runtime_checkable
class ValueResultLike(ResultLike, Protocol[T_co]):
    """ResultLike whose erased accessor is narrowed to the carried value type."""

    def get_value(self) -> T_co | None: ...


async def maybe_await(value: T | Awaitable[T]) -> T:
    """Await value if it is awaitable (coroutine, Task, Future), else return it as-is."""
    if inspect.isawaitable(value):
        return await value
    return value
