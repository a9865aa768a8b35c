"""Shared fixtures: a fake wallet server behind httpx.MockTransport."""

import json
from collections.abc import Callable
from typing import Any, TypeAlias

import httpx
import pytest

from dlcwallet.server.client import ServerClient
from dlcwallet.server.protocol import Request, Response

SERVER_URL = "http://wallet.test/"

Handler: TypeAlias = Callable[[list[Any]], Response | httpx.Response]


def envelope(resp: Response) -> dict[str, Any]:
    """Server-side wire form of a response envelope."""
    payload: dict[str, Any] = {"result": resp.result}
    if resp.error is not None:
        payload["error"] = resp.error
    return payload


class FakeBackend:
    """Answers wallet server messages from per-method handlers and records every request."""

    def __init__(self) -> None:
        self.handlers: dict[str, Handler] = {}
        self.requests: list[Request] = []
        self.http_requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def on(self, method: str, result: Any = None, *, error: str | None = None) -> None:
        """Answer ``method`` with a fixed envelope."""
        self.handlers[method] = lambda _params: Response(result=result, error=error)

    def on_call(self, method: str, handler: Handler) -> None:
        """Answer ``method`` by calling ``handler`` with the request params."""
        self.handlers[method] = handler

    def count(self, method: str) -> int:
        """Number of requests received for ``method``."""
        return sum(1 for r in self.requests if r.method == method)

    def params(self, method: str) -> list[list[Any]]:
        """Params of every request received for ``method``, in order."""
        return [r.params for r in self.requests if r.method == method]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        req = Request(method=body["method"], params=body.get("params") or [])
        self.requests.append(req)
        self.http_requests.append(request)
        handler = self.handlers.get(req.method)
        if handler is None:
            return httpx.Response(500, text=f"unknown method {req.method}")
        out = handler(req.params)
        if isinstance(out, httpx.Response):
            return out
        return httpx.Response(200, json=envelope(out))


@pytest.fixture
def backend() -> FakeBackend:
    """Fake server with no handlers."""
    return FakeBackend()


@pytest.fixture
def client(backend: FakeBackend) -> ServerClient:
    """Client wired to the fake server."""
    return ServerClient(SERVER_URL, transport=backend.transport)
