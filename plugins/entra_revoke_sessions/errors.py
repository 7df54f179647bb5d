"""Failures raised by the revoke-sessions action.

Messages always embed the HTTP status code when one exists; the ``error``
handler classifies failures by looking for those codes in the message text.
"""

from __future__ import annotations

import json

from action_sdk import HttpRequestFailed, NonRetryableError, RetryableError


class InvalidParamsError(NonRetryableError):
    """Invocation input is missing or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="invalid_params")


class ConfigurationError(NonRetryableError):
    """The host-supplied environment is incomplete."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="configuration_error")


class AuthenticationRequiredError(NonRetryableError):
    """Neither a pre-issued token nor client credentials are configured."""

    def __init__(self) -> None:
        super().__init__(
            "OAuth2 authentication is required: configure an access token secret "
            "or client credentials",
            error_code="auth_missing",
        )


class MalformedTokenResponseError(NonRetryableError):
    """The token endpoint answered 2xx without a usable ``access_token``."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Malformed token response: {detail}", error_code="malformed_token_response")


class TokenRequestFailed(HttpRequestFailed, NonRetryableError):
    """The token endpoint rejected the client-credentials exchange."""

    def __init__(self, status_code: int, url: str, reason: str = "", body: object = None, headers: dict | None = None) -> None:
        details = body if isinstance(body, str) else json.dumps(body)
        super().__init__(
            status_code,
            url,
            reason=reason,
            body=body,
            headers=headers,
            message=f"Failed to obtain OAuth2 token: {status_code} {reason}. Details: {details}",
            error_code="token_request_failed",
        )
        self.details["provider_message"] = self.provider_message


class RevocationFailed(HttpRequestFailed):
    """The revocation endpoint returned a non-success status."""

    def __init__(self, status_code: int, url: str, reason: str = "", body: str = "", headers: dict | None = None) -> None:
        super().__init__(
            status_code,
            url,
            reason=reason,
            body=body,
            headers=headers,
            message=f"Failed to revoke sessions: {status_code} {reason}. Details: {body}",
        )
        self.details["provider_message"] = self.provider_message


class UnexpectedResponseError(RetryableError):
    """A 2xx response whose body could not be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="unexpected_response")
