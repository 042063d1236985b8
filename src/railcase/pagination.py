"""Immutable pagination carriers.

Three ways of returning one page of items:
- PagedResult: offset paging with a total count and 1-based page number
- CursorResult: opaque cursor tokens, optional previous cursor and total
- SliceResult: items plus a has-more flag, nothing else

Each map() transforms the items and keeps the paging metadata.

Example:
    >>> page = PagedResult.create([1, 2, 3], total_count=7, page_size=3, page_number=1)
    >>> page.total_pages, page.has_next_page
    (3, True)
    >>> page.map(str).items
    ('1', '2', '3')
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt, computed_field

from railcase.foundation.errors import require_not_none

T = TypeVar("T")
U = TypeVar("U")

_CARRIER_CONFIG = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")


class PagedResult(BaseModel, Generic[T]):
    """One page of an offset-paginated listing."""

    model_config = _CARRIER_CONFIG

    items: tuple[T, ...] = Field(default=(), description="Items on the current page")
    total_count: NonNegativeInt = Field(default=0, description="Items across all pages")
    page_size: NonNegativeInt = 25
    page_number: PositiveInt = Field(default=1, description="1-based page number")

    @classmethod
    def create(cls, items: Iterable[T], total_count: int, page_size: int, page_number: int) -> PagedResult[T]:
        return cls(items=tuple(items), total_count=total_count, page_size=page_size, page_number=page_number)

    @classmethod
    def empty(cls, page_size: int = 25) -> PagedResult[T]:
        return cls(items=(), total_count=0, page_size=page_size, page_number=1)

    @computed_field
    @property
    def count(self) -> int:
        return len(self.items)

    @computed_field
    @property
    def is_empty(self) -> bool:
        return not self.items

    @computed_field
    @property
    def total_pages(self) -> int:
        """ceil(total_count / page_size); 0 when page_size is 0."""
        return math.ceil(self.total_count / self.page_size) if self.page_size > 0 else 0

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    def map(self, selector: Callable[[T], U]) -> PagedResult[U]:
        require_not_none(selector, "selector")
        return PagedResult[Any](
            items=tuple(selector(item) for item in self.items),
            total_count=self.total_count,
            page_size=self.page_size,
            page_number=self.page_number,
        )


class CursorResult(BaseModel, Generic[T]):
    """One page of a cursor-paginated listing. A None next_cursor means there is no next page."""

    model_config = _CARRIER_CONFIG

    items: tuple[T, ...] = ()
    next_cursor: str | None = None
    has_next_page: bool = False
    previous_cursor: str | None = None
    total_count: NonNegativeInt | None = None

    @classmethod
    def create(
        cls,
        items: Iterable[T],
        next_cursor: str | None,
        has_next_page: bool,
        *,
        previous_cursor: str | None = None,
        total_count: int | None = None,
    ) -> CursorResult[T]:
        return cls(items=tuple(items), next_cursor=next_cursor, has_next_page=has_next_page,
                   previous_cursor=previous_cursor, total_count=total_count)

    @classmethod
    def empty(cls) -> CursorResult[T]:
        return cls()

    @computed_field
    @property
    def count(self) -> int:
        return len(self.items)

    @computed_field
    @property
    def is_empty(self) -> bool:
        return not self.items

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.previous_cursor is not None

    def map(self, selector: Callable[[T], U]) -> CursorResult[U]:
        require_not_none(selector, "selector")
        return CursorResult[Any](
            items=tuple(selector(item) for item in self.items),
            next_cursor=self.next_cursor,
            has_next_page=self.has_next_page,
            previous_cursor=self.previous_cursor,
            total_count=self.total_count,
        )


class SliceResult(BaseModel, Generic[T]):
    """A run of items and whether more follow. No cursor, no count."""

    model_config = _CARRIER_CONFIG

    items: tuple[T, ...] = ()
    has_more: bool = False

    @classmethod
    def create(cls, items: Iterable[T], has_more: bool) -> SliceResult[T]:
        return cls(items=tuple(items), has_more=has_more)

    @classmethod
    def empty(cls) -> SliceResult[T]:
        return cls()

    @computed_field
    @property
    def count(self) -> int:
        return len(self.items)

    @computed_field
    @property
    def is_empty(self) -> bool:
        return not self.items

    def map(self, selector: Callable[[T], U]) -> SliceResult[U]:
        require_not_none(selector, "selector")
        return SliceResult[Any](items=tuple(selector(item) for item in self.items), has_more=self.has_more)
