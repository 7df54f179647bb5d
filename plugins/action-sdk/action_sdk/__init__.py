"""action-sdk: building blocks for host-invoked automation actions."""

from __future__ import annotations

from action_sdk.context import ActionContext
from action_sdk.contracts import assert_action_contract, validate_params
from action_sdk.errors import ActionError, HttpRequestFailed, NonRetryableError, RetryableError
from action_sdk.http import create_http_client
from action_sdk.result import ActionResult, ResultStatus

__all__ = [
    "ActionContext",
    "ActionError",
    "ActionResult",
    "assert_action_contract",
    "create_http_client",
    "HttpRequestFailed",
    "NonRetryableError",
    "ResultStatus",
    "RetryableError",
    "validate_params",
]
