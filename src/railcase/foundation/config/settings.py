"""Environment-based configuration using pydantic-settings.

Example:
    >>> from railcase.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # RAILCASE_LOG_LEVEL=DEBUG
    # RAILCASE_LOG_CAPTURED_ERRORS=false
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RAILCASE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force console colors on/off (None = auto-detect)")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v


class RailcaseSettings(BaseSettings):
    """Root settings for railcase.

    Example environment variables:
        RAILCASE_LOG_LEVEL=DEBUG
        RAILCASE_LOG_FORMAT=json
        RAILCASE_LOG_CAPTURED_ERRORS=true
    """

    model_config = SettingsConfigDict(
        env_prefix="RAILCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    log_captured_errors: bool = Field(
        default=True,
        description="Emit a DEBUG entry whenever an operator turns an exception into a failure",
    )


@lru_cache(maxsize=1)
def get_settings() -> RailcaseSettings:
    """Get the global settings instance (cached)."""
    return RailcaseSettings()


def try_get_settings() -> RailcaseSettings | None:
    """Cached settings, or None when the environment holds values that fail validation."""
    try:
        return get_settings()
    except ValidationError:
        return None


def reset_settings() -> None:
    """Clear the cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
