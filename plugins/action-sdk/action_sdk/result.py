"""Result envelope types for action handler return values.

Handlers build results here instead of hand-writing dicts:

    from action_sdk import ActionResult

    return ActionResult.success(userPrincipalName=upn, value=True).to_dict()
    return ActionResult.retry_requested(retry_after_seconds=5).to_dict()
    return ActionResult.halted(reason="timeout", userPrincipalName=upn).to_dict()

``to_dict()`` produces the flat payload the host expects, e.g.
``{"status": "success", "userPrincipalName": "...", "value": True}``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ResultStatus(str, Enum):
    """Statuses a handler may report back to the host."""

    success = "success"
    retry_requested = "retry_requested"
    halted = "halted"


class ActionResult:
    """Canonical result type for action handlers.

    Prefer the classmethods over direct construction.
    """

    def __init__(self, status: ResultStatus | str, data: dict[str, Any] | None = None) -> None:
        self.status = status.value if isinstance(status, ResultStatus) else str(status)
        self.data = data if data is not None else {}

    @classmethod
    def success(cls, **data: Any) -> "ActionResult":
        """Return a successful result carrying ``data`` fields."""
        return cls(ResultStatus.success, data)

    @classmethod
    def retry_requested(cls, retry_after_seconds: int | None = None) -> "ActionResult":
        """Ask the host to retry; the delay is a scheduling hint for the host only."""
        data: dict[str, Any] = {}
        if retry_after_seconds is not None:
            data["retryAfterSeconds"] = int(retry_after_seconds)
        return cls(ResultStatus.retry_requested, data)

    @classmethod
    def halted(cls, reason: Any, **data: Any) -> "ActionResult":
        """Report a host-initiated halt."""
        return cls(ResultStatus.halted, {**data, "reason": reason})

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, **self.data}

    def __repr__(self) -> str:
        return f"ActionResult(status={self.status!r}, data={self.data!r})"
