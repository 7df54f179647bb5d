"""Test scaffolding for action development.

Provides :class:`FakeContextBuilder` (fluent ``ActionContext`` factory) and
:class:`FakeHttpBuilder` (route table served through ``httpx.MockTransport``).

Typical usage::

    ctx = FakeContextBuilder().with_env("ADDRESS", BASE).with_secret("TOKEN", "t").build()
    http = FakeHttpBuilder().with_response("POST", url, json={"value": True}).build()

    with http.patch():
        result = await action.invoke(params, ctx)

    assert http.requests[0].headers["Authorization"] == "Bearer t"
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any
from unittest.mock import patch

import httpx

from .context import ActionContext


class FakeContextBuilder:
    """Fluent builder for an ``ActionContext`` in unit tests."""

    def __init__(self) -> None:
        self._environment: dict[str, str] = {}
        self._secrets: dict[str, str] = {}

    def with_env(self, key: str, value: str) -> "FakeContextBuilder":
        """Set ``environment[key]``; returns ``self`` for chaining."""
        self._environment[key] = value
        return self

    def with_secret(self, key: str, value: str) -> "FakeContextBuilder":
        """Set ``secrets[key]``; returns ``self`` for chaining."""
        self._secrets[key] = value
        return self

    def build(self) -> ActionContext:
        return ActionContext(environment=self._environment, secrets=self._secrets)


class FakeHttp:
    """Serves canned responses and records every request the action makes.

    Attributes:
        requests: Every ``httpx.Request`` seen, in order, including unmatched ones.
    """

    def __init__(self, routes: dict[tuple[str, str], dict[str, Any]]) -> None:
        self._routes = routes
        self.requests: list[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, str(request.url)))
        if route is None:
            raise AssertionError(f"Unexpected HTTP request: {request.method} {request.url}")
        if route["type"] == "error":
            raise route["exc"]
        return httpx.Response(request=request, **route["response"])

    def requests_to(self, url: str) -> list[httpx.Request]:
        """Return the recorded requests whose URL equals ``url``."""
        target = str(httpx.URL(url))
        return [r for r in self.requests if str(r.url) == target]

    @contextmanager
    def patch(self) -> Generator["FakeHttp", None, None]:
        """Route every ``httpx.AsyncClient`` created inside the block through this fake."""
        transport = httpx.MockTransport(self._handle)
        real_client = httpx.AsyncClient

        def _client_factory(*args: Any, **kwargs: Any) -> httpx.AsyncClient:
            kwargs["transport"] = transport
            return real_client(*args, **kwargs)

        with patch("httpx.AsyncClient", side_effect=_client_factory):
            yield self


class FakeHttpBuilder:
    """Fluent builder for :class:`FakeHttp`.

    Routes match on the exact ``(method, url)`` pair, with the URL normalised
    the same way httpx normalises outgoing request URLs.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], dict[str, Any]] = {}

    def with_response(
        self,
        method: str,
        url: str,
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> "FakeHttpBuilder":
        """Answer ``method url`` with the given status and body.

        Args:
            method: HTTP method string (case-insensitive).
            url: Exact URL to match.
            status_code: Response status code.
            json: JSON-serialisable body; takes precedence over ``text``.
            text: Raw text body.
            headers: Optional response headers.

        Returns:
            ``self`` for method chaining.
        """
        response: dict[str, Any] = {"status_code": status_code, "headers": headers or {}}
        if json is not None:
            response["json"] = json
        elif text is not None:
            response["text"] = text
        self._routes[(method.upper(), str(httpx.URL(url)))] = {"type": "response", "response": response}
        return self

    def with_network_error(self, method: str, url: str, exc: Exception | None = None) -> "FakeHttpBuilder":
        """Make ``method url`` raise ``exc`` (default: ``httpx.ConnectError``)."""
        exc = exc or httpx.ConnectError("connection refused")
        self._routes[(method.upper(), str(httpx.URL(url)))] = {"type": "error", "exc": exc}
        return self

    def build(self) -> FakeHttp:
        return FakeHttp(dict(self._routes))
