"""Microsoft Graph client for the revokeSignInSessions call."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from action_sdk.http import credential_hash

from .errors import RevocationFailed, UnexpectedResponseError

logger = logging.getLogger(__name__)

REVOKE_PATH = "/v1.0/users/{user}/revokeSignInSessions"

# Characters encodeURIComponent leaves alone besides letters, digits and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"

BEARER_PREFIX = "Bearer "


def normalize_address(address: str) -> str:
    """Drop exactly one trailing slash from the base address."""
    return address[:-1] if address.endswith("/") else address


def encode_user_principal_name(user_principal_name: str) -> str:
    """Percent-encode a UPN as a single URI path component (``@`` becomes ``%40``)."""
    return quote(user_principal_name, safe=_URI_COMPONENT_SAFE)


def build_revocation_url(address: str, user_principal_name: str) -> str:
    """Return ``{address}/v1.0/users/{encoded upn}/revokeSignInSessions``."""
    path = REVOKE_PATH.format(user=encode_user_principal_name(user_principal_name))
    return f"{normalize_address(address)}{path}"


def bearer(token: str) -> str:
    """Prefix ``token`` with ``Bearer `` unless it already carries it."""
    return token if token.startswith(BEARER_PREFIX) else f"{BEARER_PREFIX}{token}"


class _GraphSessionClient:
    """Issues the revocation POST for one invocation.

    Holds the base address and normalized credential so callers only pass the
    user identifier.
    """

    def __init__(self, http: httpx.AsyncClient, address: str, token: str) -> None:
        self._http = http
        self._address = address
        self._authorization = bearer(token)

    async def revoke_sign_in_sessions(self, user_principal_name: str) -> bool:
        """Revoke every sign-in session of ``user_principal_name``.

        Returns:
            The ``value`` field of the response, ``True`` when absent or falsy.

        Raises:
            RevocationFailed: The endpoint answered with a non-2xx status.
            UnexpectedResponseError: A 2xx answer with a non-JSON body.
        """
        url = build_revocation_url(self._address, user_principal_name)
        logger.info(
            "POST revokeSignInSessions",
            extra={"url": url, "auth_bearer_hash": credential_hash(self._authorization)},
        )
        resp = await self._http.post(
            url,
            headers={
                "Authorization": self._authorization,
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )

        if not resp.is_success:
            failure = RevocationFailed(
                resp.status_code,
                url,
                reason=resp.reason_phrase,
                body=resp.text,
                headers=dict(resp.headers),
            )
            logger.warning(
                "revokeSignInSessions failed",
                extra={
                    "url": url,
                    "status": failure.status_code,
                    "transient": failure.is_retryable,
                    "provider_message": failure.provider_message,
                },
            )
            raise failure

        body: Any = {}
        if resp.content.strip():
            try:
                body = resp.json()
            except ValueError as exc:
                raise UnexpectedResponseError(
                    f"revokeSignInSessions returned {resp.status_code} with a non-JSON body"
                ) from exc

        value = body.get("value") if isinstance(body, dict) else None
        # Graph answers {"value": true}; anything else on a 2xx still means revoked
        return bool(value) if value else True
