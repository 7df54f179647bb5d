"""pytest configuration for the action-sdk test suite."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop the cached settings so each test sees its own environment."""
    for key in (
        "ACTION_ENVIRONMENT",
        "ACTION_VERSION",
        "ACTION_LOG_LEVEL",
        "ACTION_LOG_FORMAT",
        "ACTION_HTTP_TIMEOUT",
        "ACTION_USER_AGENT",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("action_sdk.config.settings", None)
    yield
