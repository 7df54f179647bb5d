"""HTTP client construction for actions.

Each invocation opens its own ``httpx.AsyncClient`` and closes it when done,
so no connection state is shared between invocations::

    async with create_http_client() as client:
        resp = await client.post(url, headers=headers)
"""

from __future__ import annotations

import hashlib
from typing import Any

import httpx

from .config import get_settings_instance


def create_http_client(**overrides: Any) -> httpx.AsyncClient:
    """Create an HTTP client configured from runtime settings.

    ``overrides`` are passed straight to ``httpx.AsyncClient``. The timeout is
    only set when ``ACTION_HTTP_TIMEOUT`` is configured; otherwise the httpx
    default applies.
    """
    settings = get_settings_instance()
    kwargs: dict[str, Any] = {
        "headers": {"User-Agent": settings.user_agent or f"action-sdk/{settings.version}"},
    }
    if settings.http_timeout is not None:
        kwargs["timeout"] = httpx.Timeout(settings.http_timeout)
    kwargs.update(overrides)
    return httpx.AsyncClient(**kwargs)


def decode_body(resp: httpx.Response) -> Any:
    """Return the parsed JSON body when possible, else the raw text."""
    try:
        return resp.json()
    except ValueError:
        return resp.text


def credential_hash(authorization: str | None) -> str | None:
    """Short, non-reversible fingerprint of a credential for audit logs."""
    if not authorization:
        return None
    value = authorization.split(" ", 1)[1] if authorization.startswith("Bearer ") else authorization
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:10]
