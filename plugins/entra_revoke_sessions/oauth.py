"""Access token acquisition.

A pre-issued token is returned as stored; client credentials are exchanged
at the configured token endpoint with a single form-encoded POST.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from action_sdk.http import decode_body

from .config import AuthStyle
from .credentials import ClientCredentials, Credentials, PreIssuedToken
from .errors import MalformedTokenResponseError, TokenRequestFailed

logger = logging.getLogger(__name__)


async def acquire_token(credentials: Credentials, http: httpx.AsyncClient) -> str:
    """Return an access token for ``credentials``; no network call for a pre-issued token."""
    if isinstance(credentials, PreIssuedToken):
        logger.debug("Using pre-issued access token", extra={"secret": credentials.source})
        return credentials.token.get_secret_value()
    return await request_client_credentials_token(credentials, http)


async def request_client_credentials_token(credentials: ClientCredentials, http: httpx.AsyncClient) -> str:
    """Run the OAuth2 client-credentials grant against ``credentials.token_url``.

    ``InParams`` puts ``client_id``/``client_secret`` in the form body; every
    other style sends them as HTTP Basic credentials.

    Raises:
        TokenRequestFailed: The endpoint answered with a non-2xx status.
        MalformedTokenResponseError: A 2xx answer without a usable ``access_token``.
    """
    form: dict[str, str] = {"grant_type": "client_credentials"}
    if credentials.scope:
        form["scope"] = credentials.scope
    if credentials.audience:
        form["audience"] = credentials.audience

    request_kwargs: dict[str, Any] = {}
    if credentials.auth_style is AuthStyle.in_params:
        form["client_id"] = credentials.client_id
        form["client_secret"] = credentials.client_secret.get_secret_value()
    else:
        request_kwargs["auth"] = httpx.BasicAuth(credentials.client_id, credentials.client_secret.get_secret_value())

    logger.info(
        "Requesting OAuth2 token",
        extra={"token_url": credentials.token_url, "auth_style": credentials.auth_style.value},
    )
    resp = await http.post(
        credentials.token_url,
        data=form,
        headers={
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        },
        **request_kwargs,
    )

    if not resp.is_success:
        failure = TokenRequestFailed(
            resp.status_code,
            credentials.token_url,
            reason=resp.reason_phrase,
            body=decode_body(resp),
            headers=dict(resp.headers),
        )
        logger.warning(
            "OAuth2 token request failed",
            extra={
                "token_url": credentials.token_url,
                "status": failure.status_code,
                "provider_message": failure.provider_message,
            },
        )
        raise failure

    try:
        body = resp.json()
    except ValueError as exc:
        raise MalformedTokenResponseError("token endpoint did not return JSON") from exc

    access_token = body.get("access_token") if isinstance(body, dict) else None
    if not isinstance(access_token, str) or not access_token:
        raise MalformedTokenResponseError("no access_token in token endpoint response")
    return access_token
