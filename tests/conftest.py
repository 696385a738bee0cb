"""Pytest configuration and shared fakes for osuapi."""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import pytest

from osuapi.client.builder import OsuBuilder
from osuapi.client.osu import Osu

API_PREFIX = "/api/v2/"
TOKEN_PATH = "/oauth/token"


class FakeClock:
    """Manual time source whose sleep advances the clock instantly.

    Provides 'sleeps' to inspect every requested wait.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeApi:
    """In-process stand-in for the osu! API behind httpx.MockTransport.

    Serves the token endpoint and any registered API route, and records
    every request in 'call_history' so tests can inspect what was sent.
    """

    def __init__(self, expires_in: int = 86400, refresh_token: str | None = None):
        self.expires_in = expires_in
        self.refresh_token = refresh_token
        self.token_status = 200
        self.token_body: Any = None
        self.token_calls = 0
        self.routes: dict[tuple[str, str], httpx.Response] = {}
        self.call_history: list[httpx.Request] = []

    def add(
        self,
        path: str,
        json_body: Any = None,
        status: int = 200,
        content: bytes | None = None,
        method: str = "GET",
    ) -> None:
        if content is None:
            content = json.dumps(json_body).encode("utf-8")
        self.routes[(method, API_PREFIX + path)] = httpx.Response(
            status, content=content
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.call_history.append(request)

        if request.url.path == TOKEN_PATH:
            self.token_calls += 1
            if self.token_status != 200:
                error = self.token_body or {"error": "invalid_client"}
                return httpx.Response(self.token_status, json=error)
            body: dict[str, Any] = {
                "access_token": f"token-{self.token_calls}",
                "token_type": "Bearer",
                "expires_in": self.expires_in,
            }
            if self.refresh_token is not None:
                body["refresh_token"] = f"{self.refresh_token}-{self.token_calls}"
            return httpx.Response(200, json=body)

        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, json={"error": "Specified resource not found."})
        return httpx.Response(response.status_code, content=response.content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.call_history if r.url.path != TOKEN_PATH]

    @property
    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.call_history if r.url.path == TOKEN_PATH]


async def blocked_sleep(_seconds: float) -> None:
    """Sleep that never returns, keeping the token renewal idle."""
    await asyncio.Event().wait()


@pytest.fixture
def fake_clock() -> FakeClock:
    """Fixture providing a manual clock starting at zero."""
    return FakeClock()


@pytest.fixture
def fake_api() -> FakeApi:
    """Fixture providing an empty FakeApi."""
    return FakeApi()


@pytest.fixture
def osu_factory(fake_api: FakeApi) -> Callable[..., Awaitable[Osu]]:
    """Factory building Osu clients wired to the fake_api fixture.

    Returns:
        A coroutine function accepting a builder customization callback.
    """

    async def _make_osu(
        configure: Callable[[OsuBuilder], OsuBuilder] | None = None,
    ) -> Osu:
        builder = (
            Osu.builder()
            .client_id(123)
            .client_secret("client-secret")
            .http_client(fake_api.client())
            .refresh_sleep(blocked_sleep)
        )
        if configure is not None:
            builder = configure(builder)
        return await builder.build()

    return _make_osu
