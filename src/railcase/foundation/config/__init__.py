"""Configuration for railcase via pydantic-settings."""

from .settings import LoggingSettings, RailcaseSettings, get_settings, reset_settings, try_get_settings

__all__ = ["RailcaseSettings", "LoggingSettings", "get_settings", "reset_settings", "try_get_settings"]
