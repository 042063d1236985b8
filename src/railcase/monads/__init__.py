"""Monadic wrappers for railway-oriented programming.

Provides:
- Result[T] / VoidResult: success or failure, with and without a value
- Option[T]: a value that may be absent
- Async operators and the AsyncResult / AsyncOption pipelines

Example:
    >>> from railcase.monads import Ok, Result
    >>>
    >>> def divide(a: int, b: int) -> Result[float]:
    ...     return Ok(a / b) if b else Result.fail(ZeroDivisionError("division by zero"))
    >>>
    >>> divide(10, 2).map(lambda x: x * 2).then(lambda x: Ok(x + 1))
    Success(11.0)
"""

from .aio import (
    AsyncOption,
    AsyncResult,
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
    switch_async,
    switch_option_async,
    then_async,
    then_option_async,
    then_result_async,
    then_void_async,
    to_result_async,
    to_void_async,
    try_fn_async,
    where_async,
    where_option_async,
)
from .option import NOTHING, Option, Some
from .result import Err, Ok, Result, VoidResult, collect_results, sequence, traverse, try_fn
from .types import UNIT, ErrorSelector, ResultLike, Unit, ValueResultLike

__all__ = [
    # Core types
    "Result", "VoidResult", "Option",
    "Ok", "Err", "Some", "NOTHING",
    "Unit", "UNIT",
    # Capability protocols
    "ResultLike", "ValueResultLike", "ErrorSelector",
    # Capture helpers
    "try_fn", "try_fn_async",
    # Collection operations
    "sequence", "traverse", "collect_results",
    # Async pipelines
    "AsyncResult", "AsyncOption",
    # Async operators
    "map_async", "then_async", "then_void_async", "then_result_async",
    "where_async", "ensure_async", "match_async", "switch_async",
    "on_success_async", "on_success_try_async", "on_failure_async", "on_failure_try_async",
    "inspect_async", "inspect_try_async", "to_void_async",
    "map_option_async", "then_option_async", "where_option_async",
    "match_option_async", "switch_option_async", "get_value_or_else_async", "to_result_async",
]
