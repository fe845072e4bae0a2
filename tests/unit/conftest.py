"""Shared fixtures for utilkit unit tests."""

from __future__ import annotations

import os

import pytest

from utilkit.settings import reload_settings
from utilkit.settings.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop UTILKIT_* overrides from the process env and reset the settings cache."""

    for name in list(os.environ):
        if name.upper().startswith("UTILKIT_"):
            monkeypatch.delenv(name, raising=False)
    reload_settings()
    yield
    get_settings.cache_clear()
