"""Entra ID action that revokes every sign-in session of one user.

The host calls three handlers:

- ``invoke`` obtains an OAuth2 access token and POSTs to
  ``{address}/v1.0/users/{upn}/revokeSignInSessions``.
- ``error`` decides whether a failed ``invoke`` should be retried.
- ``halt`` reports a host-initiated stop.

Authentication uses either a pre-issued access token stored under
``OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN`` (``BEARER_AUTH_TOKEN`` is still
read for older deployments) or an OAuth2 client-credentials exchange driven
by ``OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET`` and the matching environment
keys. Nothing is cached between invocations.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from action_sdk import (
    ActionContext,
    ActionResult,
    NonRetryableError,
    create_http_client,
    validate_params,
)

from .classifier import classify_failure, failure_message
from .client import _GraphSessionClient
from .config import ActionEnvironment
from .credentials import resolve_credentials
from .errors import ConfigurationError, InvalidParamsError
from .oauth import acquire_token

logger = logging.getLogger(__name__)

UNKNOWN_USER = "unknown"

_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "userPrincipalName": {
            "type": "string",
            "minLength": 1,
            "description": "User principal name (email-style identifier) of the user to sign out",
        },
        "address": {
            "type": "string",
            "description": "Base URL of the Graph API; overrides the ADDRESS environment value",
        },
    },
    "required": ["userPrincipalName"],
    # The host forwards its own bookkeeping fields alongside the inputs.
    "additionalProperties": True,
}


def _require_user_principal_name(params: Mapping[str, Any]) -> str:
    upn = params.get("userPrincipalName")
    if not isinstance(upn, str) or not upn.strip():
        raise InvalidParamsError("userPrincipalName is required")
    return upn


def _resolve_address(params: Mapping[str, Any], env: ActionEnvironment) -> str:
    """Return the explicit ``address`` param, else the ``ADDRESS`` environment value."""
    address = params.get("address")
    if isinstance(address, str) and address.strip():
        return address.strip()
    if env.address:
        return env.address
    raise ConfigurationError("No base address: pass 'address' or set the ADDRESS environment value")


class RevokeSessionsAction:
    """Host-invoked action revoking a user's Entra ID sign-in sessions.

    Implements the action protocol:
    - ``name`` and ``version`` class attributes matched to the manifest
    - ``get_schema()``         input JSON Schema
    - ``get_output_schema()``  JSON Schema of the success payload
    - ``invoke()``, ``error()``, ``halt()``  async handlers
    """

    name: str = "entra_revoke_sessions"
    version: str = "1"

    def get_schema(self) -> dict[str, Any]:
        return _INPUT_SCHEMA

    def get_output_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "status": {"type": "string", "enum": ["success"]},
                "userPrincipalName": {"type": "string"},
                "value": {
                    "type": "boolean",
                    "description": "Graph's revocation acknowledgement; true when the call succeeded",
                },
            },
            "required": ["status", "userPrincipalName", "value"],
            "additionalProperties": False,
        }

    async def invoke(self, params: Mapping[str, Any], context: Any) -> dict[str, Any]:
        """Revoke the sign-in sessions of ``params["userPrincipalName"]``.

        Args:
            params:  ``{"userPrincipalName": str, "address": str (optional)}``.
            context: ``ActionContext`` or a ``{"environment": ..., "secrets": ...}`` mapping.

        Returns:
            ``{"status": "success", "userPrincipalName": ..., "value": bool}``.

        Raises:
            InvalidParamsError: Missing or malformed input; raised before any network call.
            ConfigurationError: No base address, or incomplete client credentials.
            AuthenticationRequiredError: No credential secrets configured.
            TokenRequestFailed: The token endpoint returned a non-2xx status.
            MalformedTokenResponseError: The token endpoint returned no ``access_token``.
            RevocationFailed: The revocation endpoint returned a non-2xx status.
        """
        ctx = ActionContext.coerce(context)
        if not isinstance(params, Mapping):
            raise InvalidParamsError("params must be an object")

        upn = _require_user_principal_name(params)
        if problems := validate_params(self.get_schema(), dict(params)):
            raise InvalidParamsError(f"Invalid params: {'; '.join(problems)}")

        env = ActionEnvironment.from_context(ctx)
        address = _resolve_address(params, env)
        credentials = resolve_credentials(ctx, env)

        logger.info(
            "Revoking sign-in sessions",
            extra={"user_principal_name": upn, "credential_kind": credentials.kind},
        )
        async with create_http_client() as http:
            token = await acquire_token(credentials, http)
            value = await _GraphSessionClient(http, address, token).revoke_sign_in_sessions(upn)

        logger.info("Sign-in sessions revoked", extra={"user_principal_name": upn})
        return ActionResult.success(userPrincipalName=upn, value=value).to_dict()

    async def error(self, params: Mapping[str, Any], context: Any) -> dict[str, Any]:
        """Turn the failure in ``params["error"]`` into a retry request, or re-raise it.

        Fatal failures propagate: an exception is raised unchanged; a plain
        message or ``{"message": ...}`` mapping is raised as ``NonRetryableError``.
        """
        failure = params.get("error") if isinstance(params, Mapping) else None
        decision = classify_failure(failure)

        if not decision.retryable:
            logger.warning("Failure is not retryable", extra={"reason": decision.reason})
            if isinstance(failure, BaseException):
                raise failure
            raise NonRetryableError(failure_message(failure), error_code="fatal_upstream_error")

        logger.info(
            "Requesting retry",
            extra={"reason": decision.reason, "retry_after_seconds": decision.retry_after_seconds},
        )
        return ActionResult.retry_requested(decision.retry_after_seconds).to_dict()

    async def halt(self, params: Mapping[str, Any], context: Any) -> dict[str, Any]:
        """Report a host-initiated halt; never raises."""
        if not isinstance(params, Mapping):
            params = {}
        upn = params.get("userPrincipalName")
        if not isinstance(upn, str) or not upn.strip():
            upn = UNKNOWN_USER
        reason = params.get("reason")
        logger.info("Action halted", extra={"user_principal_name": upn, "halt_reason": reason})
        return ActionResult.halted(reason=reason, userPrincipalName=upn).to_dict()
