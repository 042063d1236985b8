"""Observability: structured logging."""

from .logging import BoundLogger, configure_logging, get_logger, log_context

__all__ = ["BoundLogger", "configure_logging", "get_logger", "log_context"]
