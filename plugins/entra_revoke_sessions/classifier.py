"""Retry classification for failed invocations.

The host calls the action's ``error`` handler with the failure of a previous
``invoke``. Classification looks for HTTP status codes embedded in the
failure message:

- 429, 502, 503, 504: retry (host-side delay hint 5s for 429, 3s for 5xx)
- 401, 403: fatal
- anything else: retry, unless the failure is typed as non-retryable

Nothing here sleeps or performs I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from action_sdk import HttpRequestFailed, NonRetryableError

RATE_LIMIT_DELAY_SECONDS = 5
SERVER_ERROR_DELAY_SECONDS = 3

RETRYABLE_STATUS_DELAYS: dict[str, int] = {
    "429": RATE_LIMIT_DELAY_SECONDS,
    "502": SERVER_ERROR_DELAY_SECONDS,
    "503": SERVER_ERROR_DELAY_SECONDS,
    "504": SERVER_ERROR_DELAY_SECONDS,
}

FATAL_STATUS_CODES: tuple[str, ...] = ("401", "403")


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of classifying one failure."""

    retryable: bool
    reason: str
    retry_after_seconds: int | None = None


def failure_message(failure: Any) -> str:
    """Extract the message text from an exception, a ``{"message": ...}`` mapping, or a string."""
    if failure is None:
        return ""
    if isinstance(failure, BaseException):
        return str(failure)
    if isinstance(failure, Mapping):
        return str(failure.get("message") or "")
    return str(failure)


def classify_failure(failure: Any) -> RetryDecision:
    """Decide whether the host should retry after ``failure``."""
    message = failure_message(failure)

    for code, delay in RETRYABLE_STATUS_DELAYS.items():
        if code in message:
            if code == "429" and isinstance(failure, HttpRequestFailed):
                header_delay = failure.retry_after_seconds
                if header_delay is not None:
                    delay = header_delay
            return RetryDecision(True, reason=f"status {code}", retry_after_seconds=delay)

    for code in FATAL_STATUS_CODES:
        if code in message:
            return RetryDecision(False, reason=f"status {code}")

    if isinstance(failure, NonRetryableError):
        return RetryDecision(False, reason=failure.error_code)

    return RetryDecision(True, reason="unclassified")
