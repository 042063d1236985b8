"""Error taxonomy for railcase.

- ErrorCode / classify_exception: machine-readable tags for captured errors
- ContractViolationError family: argument errors, never captured into failures
- InvalidOperationError / InvalidStateError: misuse of an object's state
- AggregateFailure: several errors collected together
- require_*: argument guards used by every operator
"""

from .errors import (
    AggregateFailure,
    ArgumentInvalidError,
    ArgumentNullError,
    ContractViolationError,
    ErrorCode,
    InvalidOperationError,
    InvalidStateError,
    RailcaseError,
    classify_exception,
    require_exception,
    require_not_blank,
    require_not_none,
)
from .types import JsonDict, JsonMapping, JsonPrimitive, JsonValue

__all__ = [
    # Taxonomy
    "RailcaseError", "ContractViolationError", "ArgumentInvalidError", "ArgumentNullError",
    "InvalidOperationError", "InvalidStateError", "AggregateFailure",
    # Classification
    "ErrorCode", "classify_exception",
    # Guards
    "require_not_none", "require_not_blank", "require_exception",
    # JSON aliases
    "JsonDict", "JsonMapping", "JsonPrimitive", "JsonValue",
]
