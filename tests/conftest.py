"""
Shared fixtures: a fake Exa + Gemini upstream behind httpx.MockTransport.

Each test queues the responses it wants and then inspects `upstream.calls` to
check what the relay actually sent (and how many times).
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.handlers import get_http_client
from app.core.config import Settings, get_settings
from app.main import app
from app.services.orchestrator import RequestOrchestrator

GEMINI_BASE = "https://gemini.test/v1beta"
EXA_BASE = "https://exa.test"

# Queue this instead of a body to make the transport raise a connection error
TRANSPORT_ERROR = object()


@dataclass
class Call:
    kind: str
    url: httpx.URL
    headers: httpx.Headers
    payload: dict[str, Any]


@dataclass
class FakeUpstream:
    search: list[Any] = field(default_factory=list)
    contents: list[Any] = field(default_factory=list)
    gemini: list[Any] = field(default_factory=list)
    calls: list[Call] = field(default_factory=list)

    def of_kind(self, kind: str) -> list[Call]:
        return [c for c in self.calls if c.kind == kind]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith(":generateContent"):
            kind, queue = "gemini", self.gemini
        elif path.endswith("/contents"):
            kind, queue = "contents", self.contents
        elif path.endswith("/search"):
            kind, queue = "search", self.search
        else:
            raise AssertionError(f"unexpected upstream call: {request.url}")
        self.calls.append(Call(kind, request.url, request.headers, json.loads(request.content)))
        if not queue:
            raise AssertionError(f"no queued {kind} response")
        item = queue.pop(0)
        if item is TRANSPORT_ERROR:
            raise httpx.ConnectError("connection refused", request=request)
        if isinstance(item, httpx.Response):
            return item
        return httpx.Response(200, json=item)


def make_settings(gemini_key: str = "gemini-secret", exa_key: str = "exa-secret") -> Settings:
    return Settings(
        gemini_api_key=gemini_key,
        exa_api_key=exa_key,
        gemini_model="test-model",
        gemini_base_url=GEMINI_BASE,
        exa_base_url=EXA_BASE,
        request_timeout=5.0,
    )


def run_with(upstream: FakeUpstream, settings: Settings, op):
    """Run `op(orchestrator)` against the fake upstream on a fresh event loop."""

    async def _go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)) as http:
            return await op(RequestOrchestrator.from_http(settings, http))

    return asyncio.run(_go())


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(upstream: FakeUpstream, settings: Settings):
    """TestClient whose outbound calls go to the fake upstream."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = lambda: http
    yield TestClient(app)
    app.dependency_overrides.clear()
    asyncio.run(http.aclose())
