"""Foundation - errors and configuration shared by every railcase module."""

from __future__ import annotations

from .config import LoggingSettings, RailcaseSettings, get_settings, reset_settings
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
)

__all__ = [
    # Errors
    "RailcaseError", "ContractViolationError", "ArgumentInvalidError", "ArgumentNullError",
    "InvalidOperationError", "InvalidStateError", "AggregateFailure", "ErrorCode", "classify_exception",
    # Config
    "RailcaseSettings", "LoggingSettings", "get_settings", "reset_settings",
]
