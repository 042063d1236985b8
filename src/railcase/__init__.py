"""railcase - railway-oriented results, optional values and pagination carriers.

Quick Start:
    >>> from railcase import Ok, Option, Result
    >>>
    >>> Ok(10).ensure(lambda x: x > 0, "positive").map(lambda x: x * 2)
    Success(20)
    >>> Option.of("hello").map(len).get_value_or_default(0)
    5

Async pipelines accept pending results and async callbacks:
    >>> from railcase import AsyncResult
    >>> await AsyncResult(fetch_user(7)).then(load_orders).map(len)
"""

from __future__ import annotations

from .foundation import (
    AggregateFailure,
    ArgumentInvalidError,
    ArgumentNullError,
    ContractViolationError,
    ErrorCode,
    InvalidOperationError,
    InvalidStateError,
    RailcaseError,
    RailcaseSettings,
    classify_exception,
    get_settings,
    reset_settings,
)
from .monads import (
    NOTHING,
    UNIT,
    AsyncOption,
    AsyncResult,
    Err,
    ErrorSelector,
    Ok,
    Option,
    Result,
    ResultLike,
    Some,
    Unit,
    ValueResultLike,
    VoidResult,
    collect_results,
    ensure_async,
    get_value_or_else_async,
    inspect_async,
    inspect_try_async,
    map_async,
    map_option_async,
    match_async,
    match_option_async,
    on_failure_async,
    on_failure_try_async,
    on_success_async,
    on_success_try_async,
    sequence,
    switch_async,
    switch_option_async,
    then_async,
    then_option_async,
    then_result_async,
    then_void_async,
    to_result_async,
    to_void_async,
    traverse,
    try_fn,
    try_fn_async,
    where_async,
    where_option_async,
)
from .pagination import CursorResult, PagedResult, SliceResult
from .runtime.observability import configure_logging, get_logger, log_context

__version__ = "0.1.0"

__all__ = [
    # Results
    "Result", "VoidResult", "Ok", "Err", "Unit", "UNIT",
    "ResultLike", "ValueResultLike", "ErrorSelector",
    "try_fn", "try_fn_async", "sequence", "traverse", "collect_results",
    # Option
    "Option", "Some", "NOTHING",
    # Async
    "AsyncResult", "AsyncOption",
    "map_async", "then_async", "then_void_async", "then_result_async",
    "where_async", "ensure_async", "match_async", "switch_async",
    "on_success_async", "on_success_try_async", "on_failure_async", "on_failure_try_async",
    "inspect_async", "inspect_try_async", "to_void_async",
    "map_option_async", "then_option_async", "where_option_async",
    "match_option_async", "switch_option_async", "get_value_or_else_async", "to_result_async",
    # Pagination
    "PagedResult", "CursorResult", "SliceResult",
    # Errors
    "RailcaseError", "ContractViolationError", "ArgumentInvalidError", "ArgumentNullError",
    "InvalidOperationError", "InvalidStateError", "AggregateFailure", "ErrorCode", "classify_exception",
    # Config & logging
    "RailcaseSettings", "get_settings", "reset_settings",
    "configure_logging", "get_logger", "log_context",
]
