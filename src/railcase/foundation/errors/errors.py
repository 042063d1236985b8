"""Error taxonomy and argument guards.

Three kinds of error exist in railcase:

- Contract violations (ArgumentNullError, ArgumentInvalidError): raised
  immediately when an operator receives a missing or malformed argument.
  They signal programmer error and are never captured into a failure.
- Domain failures: any Exception carried as the error of a failed result.
- State misuse (InvalidStateError): e.g. reading the value of an empty Option.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from functools import lru_cache
from typing import Final, TypeVar

T = TypeVar("T")


class ErrorCode(StrEnum):
    """Machine-readable classification attached to captured errors."""

    ARGUMENT_NULL = "ARGUMENT_NULL"
    ARGUMENT_INVALID = "ARGUMENT_INVALID"
    INVALID_OPERATION = "INVALID_OPERATION"
    INVALID_STATE = "INVALID_STATE"
    AGGREGATE = "AGGREGATE"
    TIMEOUT = "TIMEOUT"
    NOT_FOUND = "NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    PARSE_ERROR = "PARSE_ERROR"
    VALUE_ERROR = "VALUE_ERROR"
    UNKNOWN = "UNKNOWN"


class RailcaseError(Exception):
    """Base class for every error raised by railcase itself."""

    code: ErrorCode = ErrorCode.UNKNOWN


class ContractViolationError(RailcaseError):
    """An operator was called with arguments that break its contract."""

    code = ErrorCode.ARGUMENT_INVALID


class ArgumentInvalidError(ContractViolationError, ValueError):
    """Argument is present but unusable (blank message, wrong kind of object)."""

    def __init__(self, name: str, reason: str) -> None:
        self.param_name = name
        super().__init__(f"Argument '{name}' is invalid: {reason}")


class ArgumentNullError(ArgumentInvalidError):
    """Required argument is None."""

    code = ErrorCode.ARGUMENT_NULL

    def __init__(self, name: str) -> None:
        super().__init__(name, "value cannot be None")


class InvalidOperationError(RailcaseError, RuntimeError):
    """Operation is not valid here. Default error for message-only ensure checks."""

    code = ErrorCode.INVALID_OPERATION


class InvalidStateError(InvalidOperationError):
    """Object is in a state where the requested access is not allowed."""

    code = ErrorCode.INVALID_STATE


class AggregateFailure(RailcaseError):
    """Several failures collected together (see collect_results)."""

    code = ErrorCode.AGGREGATE

    __slots__ = ("errors",)

    def __init__(self, errors: Sequence[Exception]) -> None:
        self.errors: tuple[Exception, ...] = tuple(errors)
        super().__init__(f"{len(self.errors)} error(s): " + "; ".join(f"{type(e).__name__}: {e}" for e in self.errors))


# ─────────────────────────────────────────────────────────────────────────────
# Classification
# ─────────────────────────────────────────────────────────────────────────────

# Ordered for priority
_PATTERN_CODES: Final[dict[str, ErrorCode]] = {
    "timeout": ErrorCode.TIMEOUT,
    "notfound": ErrorCode.NOT_FOUND,
    "keyerror": ErrorCode.NOT_FOUND,
    "lookup": ErrorCode.NOT_FOUND,
    "permission": ErrorCode.PERMISSION_DENIED,
    "forbidden": ErrorCode.PERMISSION_DENIED,
    "parse": ErrorCode.PARSE_ERROR,
    "json": ErrorCode.PARSE_ERROR,
    "decode": ErrorCode.PARSE_ERROR,
    "value": ErrorCode.VALUE_ERROR,
}
_PATTERN_KEYS = tuple(_PATTERN_CODES)


@lru_cache(maxsize=256)
def _classify_cached(type_name: str) -> ErrorCode:
    haystack = type_name.lower()
    for pattern in _PATTERN_KEYS:
        if pattern in haystack:
            return _PATTERN_CODES[pattern]
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map an exception to an ErrorCode. railcase errors carry their own code."""
    if isinstance(exc, RailcaseError):
        return exc.code
    return _classify_cached(type(exc).__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Guards
# ─────────────────────────────────────────────────────────────────────────────


def require_not_none(value: T | None, name: str) -> T:
    """Return value, raising ArgumentNullError if it is None."""
    if value is None:
        raise ArgumentNullError(name)
    return value


def require_not_blank(text: str | None, name: str) -> str:
    """Return text, raising if it is None, not a string, or whitespace only."""
    if text is None:
        raise ArgumentNullError(name)
    if not isinstance(text, str) or not text.strip():
        raise ArgumentInvalidError(name, "must be a non-blank string")
    return text


def require_exception(error: Exception | None, name: str = "error") -> Exception:
    """Return error, raising if it is None or not an Exception instance."""
    if error is None:
        raise ArgumentNullError(name)
    if not isinstance(error, Exception):
        raise ArgumentInvalidError(name, f"expected an Exception instance, got {type(error).__name__}")
    return error
