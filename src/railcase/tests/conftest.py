"""Shared fixtures: every test starts from default settings and silent logging."""

from __future__ import annotations

import os

import pytest

from railcase.foundation.config import reset_settings
from railcase.runtime.observability.logging import configure_logging


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> object:
    """Drop RAILCASE_* variables and reset cached settings and the log renderer."""
    for key in list(os.environ):
        if key.startswith("RAILCASE_"):
            monkeypatch.delenv(key)
    reset_settings()
    configure_logging(format="none", level="WARNING")
    yield
    monkeypatch.undo()
    reset_settings()
    configure_logging(format="none", level="WARNING")
