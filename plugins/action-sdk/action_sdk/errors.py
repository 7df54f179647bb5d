"""Exception types shared by host-invoked actions.

Actions raise these at the failure site and let them propagate to the host.
The host (or the action's own ``error`` handler) decides what to retry::

    from action_sdk import HttpRequestFailed, NonRetryableError

    if not token_url:
        raise ConfigurationError("token URL is not configured")

``RetryableError`` and ``NonRetryableError`` are markers: any ``ActionError``
subclass may mix one of them in to state its retry disposition up front.
"""

from __future__ import annotations

from typing import Any


class ActionError(Exception):
    """Base exception for action failures.

    Attributes:
        message: Human-readable message, also used as ``str(exc)``.
        error_code: Stable machine-readable code (``invalid_params``, ...).
        details: Extra structured context; never contains secrets.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "action_error",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class RetryableError(ActionError):
    """Failure that may succeed if the host runs the action again."""

    def __init__(self, message: str, error_code: str = "retryable", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, error_code=error_code, details=details)


class NonRetryableError(ActionError):
    """Failure the host must not retry (bad input, bad configuration, rejected credentials)."""

    def __init__(self, message: str, error_code: str = "non_retryable", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, error_code=error_code, details=details)


class HttpRequestFailed(ActionError):
    """Raised when an outbound HTTP call returns a non-success status.

    Mirrors the semantic helpers plugins rely on so callers don't need to
    parse status codes or dig messages out of response bodies.

    Attributes:
        status_code: int HTTP status
        reason: reason phrase reported by the server
        url: str request URL
        body: parsed body (dict/list/str) or None
        headers: dict of response headers
    """

    def __init__(
        self,
        status_code: int,
        url: str,
        reason: str = "",
        body: object = None,
        headers: dict | None = None,
        message: str | None = None,
        error_code: str | None = None,
    ) -> None:
        self.status_code = int(status_code)
        self.url = str(url)
        self.reason = reason or ""
        self.body = body
        self.headers = dict(headers or {})
        super().__init__(
            message or f"HTTP {self.status_code} calling {self.url}",
            error_code=error_code or self.error_category,
            details={"status_code": self.status_code, "url": self.url},
        )

    @property
    def error_category(self) -> str:
        """Semantic error category based on HTTP status code.

        Returns one of:
        - auth_error: 401 Unauthorized
        - forbidden: 403 Forbidden
        - not_found: 404 Not Found
        - rate_limited: 429 Too Many Requests
        - server_error: 5xx errors
        - client_error: other 4xx errors
        """
        if self.status_code == 401:
            return "auth_error"
        elif self.status_code == 403:
            return "forbidden"
        elif self.status_code == 404:
            return "not_found"
        elif self.status_code == 429:
            return "rate_limited"
        elif self.status_code >= 500:
            return "server_error"
        else:
            return "client_error"

    @property
    def is_retryable(self) -> bool:
        """True for errors that may succeed on retry (429, 5xx)."""
        return self.status_code == 429 or self.status_code >= 500

    @property
    def retry_after_seconds(self) -> int | None:
        """Parse Retry-After header if present. Returns seconds or None.

        Performs case-insensitive header lookup per RFC 7230. Negative values
        clamp to 0.
        """
        retry_after = None
        for key, value in self.headers.items():
            if key.lower() == "retry-after":
                retry_after = value
                break

        if not retry_after:
            return None
        try:
            return max(0, int(retry_after))
        except (ValueError, TypeError):
            # HTTP-date form is left to the host
            return None

    @property
    def provider_message(self) -> str:
        """Best-effort extraction of error message from response body.

        Attempts to extract from common API error formats:
        - {"error": {"message": "..."}} (Microsoft Graph)
        - {"error_description": "..."} (OAuth)
        - {"message": "..."} (simple)
        - Plain string body
        """
        if self.body is None:
            return ""

        if isinstance(self.body, str):
            return self.body[:500]

        if isinstance(self.body, dict):
            error_obj = self.body.get("error")
            if isinstance(error_obj, dict):
                msg = error_obj.get("message")
                if msg:
                    return str(msg)

            for key in ("error_description", "message", "error", "detail"):
                val = self.body.get(key)
                if val and isinstance(val, str):
                    return val

            return str(self.body)[:500]

        return str(self.body)[:500]
