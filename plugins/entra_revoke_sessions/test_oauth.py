"""Tests for access token acquisition."""

from __future__ import annotations

import httpx
import pytest
from pydantic import SecretStr

from entra_revoke_sessions.config import AuthStyle
from entra_revoke_sessions.credentials import ClientCredentials, PreIssuedToken
from entra_revoke_sessions.errors import MalformedTokenResponseError, TokenRequestFailed
from entra_revoke_sessions.oauth import acquire_token

_TOKEN_URL = "https://login.example/tenant/oauth2/v2.0/token"


def _credentials(**overrides) -> ClientCredentials:
    fields = {
        "token_url": _TOKEN_URL,
        "client_id": "cid",
        "client_secret": SecretStr("csecret"),
    }
    fields.update(overrides)
    return ClientCredentials(**fields)


class _Recorder:
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


async def test_pre_issued_token_makes_no_request() -> None:
    recorder = _Recorder(httpx.Response(500))
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as http:
        token = await acquire_token(PreIssuedToken(token=SecretStr("abc"), source="X"), http)

    assert token == "abc"
    assert recorder.requests == []


async def test_client_credentials_exchange_returns_access_token() -> None:
    recorder = _Recorder(httpx.Response(200, json={"access_token": "fresh", "expires_in": 3599}))
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as http:
        token = await acquire_token(_credentials(), http)

    assert token == "fresh"
    assert len(recorder.requests) == 1
    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == _TOKEN_URL
    assert request.headers["Accept"] == "application/json"
    assert request.content == b"grant_type=client_credentials"


async def test_auto_detect_sends_basic_credentials() -> None:
    recorder = _Recorder(httpx.Response(200, json={"access_token": "t"}))
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as http:
        await acquire_token(_credentials(auth_style=AuthStyle.auto_detect), http)

    assert recorder.requests[0].headers["Authorization"].startswith("Basic ")
    assert b"client_secret" not in recorder.requests[0].content


async def test_non_success_embeds_json_body() -> None:
    recorder = _Recorder(httpx.Response(400, json={"error": "invalid_scope"}))
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as http:
        with pytest.raises(TokenRequestFailed) as exc_info:
            await acquire_token(_credentials(), http)

    exc = exc_info.value
    assert str(exc) == 'Failed to obtain OAuth2 token: 400 Bad Request. Details: {"error": "invalid_scope"}'
    assert exc.body == {"error": "invalid_scope"}
    assert exc.error_code == "token_request_failed"
    assert exc.provider_message == "invalid_scope"
    assert exc.details["provider_message"] == "invalid_scope"


async def test_non_success_embeds_raw_text_body() -> None:
    recorder = _Recorder(httpx.Response(502, text="Bad gateway from proxy"))
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as http:
        with pytest.raises(TokenRequestFailed, match="502 Bad Gateway. Details: Bad gateway from proxy"):
            await acquire_token(_credentials(), http)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"token_type": "Bearer"}),
        httpx.Response(200, json={"access_token": ""}),
        httpx.Response(200, json={"access_token": 12}),
        httpx.Response(200, json=["access_token"]),
        httpx.Response(200, text="not json"),
    ],
)
async def test_success_without_access_token_is_malformed(response: httpx.Response) -> None:
    async with httpx.AsyncClient(transport=httpx.MockTransport(_Recorder(response))) as http:
        with pytest.raises(MalformedTokenResponseError, match="Malformed token response"):
            await acquire_token(_credentials(), http)
