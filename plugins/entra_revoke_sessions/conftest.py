"""pytest configuration for the revoke-sessions action test suite.

Resets the cached runtime settings between tests so ``monkeypatch.setenv``
on ``ACTION_*`` variables takes effect, and exposes a handler that records
what the action logs.
"""

from __future__ import annotations

import logging

import pytest


class _RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("action_sdk.config.settings", None)
    yield


@pytest.fixture
def action_logs():
    """Records emitted on the ``entra_revoke_sessions`` logger during the test."""
    handler = _RecordingHandler()
    log = logging.getLogger("entra_revoke_sessions")
    previous_level = log.level
    log.addHandler(handler)
    log.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        log.removeHandler(handler)
        log.setLevel(previous_level)


@pytest.fixture
def host_root_logs():
    """Records reaching a root-logger handler, the way a host collects logs."""
    handler = _RecordingHandler()
    root = logging.getLogger()
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)
