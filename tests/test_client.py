"""Unit tests for OsuBuilder construction and the Osu client lifecycle."""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import httpx
import pytest

from osuapi.cache import InMemoryUserCache, NoopUserCache
from osuapi.client.builder import OsuBuilder
from osuapi.client.osu import Osu
from osuapi.client.token import ClientCredentials, UserAuthorization
from osuapi.config.settings import ClientConfig, RateLimitConfig
from osuapi.exceptions import ApiResponseError, ClientBuildError
from osuapi.metrics import CounterMetrics, NoopMetrics
from osuapi.model.enums import GameMode

if TYPE_CHECKING:
    from conftest import FakeApi


@pytest.mark.unit
@pytest.mark.asyncio
class TestOsuBuilder:
    async def test_build_should_acquire_token_and_start_renewal(
        self, osu_factory, fake_api: FakeApi
    ) -> None:
        """Verifies a built client is authorized and renewing.

        Given:
            A builder with valid credentials.
        When:
            Building the client.
        Then:
            One token request was made, the store holds its token, and the
            refresh loop is running with the reported lifetime.
        """
        osu = await osu_factory()

        assert fake_api.token_calls == 1
        assert osu.engine.tokens.access == "Bearer token-1"
        assert osu.refresh_loop.running
        assert osu.refresh_loop.expires_in == 86400
        await osu.aclose()

    async def test_defaults_should_apply_without_options(
        self, osu_factory
    ) -> None:
        osu = await osu_factory()

        transport = osu.engine.transport
        assert transport.timeout == 10.0
        assert transport.retries == 2
        assert transport.ratelimiter.capacity == 15.0
        assert transport.ratelimiter.rate == 15.0
        assert isinstance(osu.cache, NoopUserCache)
        assert isinstance(osu.metrics, NoopMetrics)
        assert osu.engine.auth_kind == ClientCredentials()
        await osu.aclose()

    async def test_options_should_reach_components(self, osu_factory) -> None:
        osu = await osu_factory(
            lambda b: b.timeout(2.5)
            .retries(0)
            .ratelimit(5, 1.0)
            .with_cache()
            .with_metrics()
            .scope("identify")
        )

        transport = osu.engine.transport
        assert transport.timeout == 2.5
        assert transport.retries == 0
        assert transport.ratelimiter.capacity == 5.0
        assert isinstance(osu.cache, InMemoryUserCache)
        assert isinstance(osu.metrics, CounterMetrics)
        assert osu.engine.auth_kind == ClientCredentials(scope="identify")
        await osu.aclose()

    async def test_token_request_should_pass_rate_limit_gate(
        self, osu_factory
    ) -> None:
        """Verifies token requests consume a rate limit unit like any call.

        Given:
            A bucket of 5 refilling very slowly.
        When:
            Building the client.
        Then:
            About four units remain.
        """
        osu = await osu_factory(lambda b: b.ratelimit(5, 0.001))

        assert osu.engine.transport.ratelimiter.available == pytest.approx(
            4.0, abs=0.01
        )
        await osu.aclose()

    async def test_user_authorization_should_exchange_code(
        self, osu_factory, fake_api: FakeApi
    ) -> None:
        fake_api.refresh_token = "refresh"
        osu = await osu_factory(
            lambda b: b.with_authorization("the-code", "http://localhost/cb")
        )

        body = json.loads(fake_api.token_requests[0].content)
        assert body["grant_type"] == "authorization_code"
        assert body["code"] == "the-code"
        assert isinstance(osu.engine.auth_kind, UserAuthorization)
        assert osu.engine.tokens.refresh == "refresh-1"
        await osu.aclose()

    async def test_missing_client_id_should_fail(self) -> None:
        with pytest.raises(ClientBuildError, match="client id"):
            await OsuBuilder().client_secret("secret").build()

    async def test_missing_secret_should_fail(self) -> None:
        with pytest.raises(ClientBuildError, match="client secret"):
            await OsuBuilder().client_id(1).build()

    @pytest.mark.parametrize(
        "configure",
        [
            lambda b: b.timeout(0),
            lambda b: b.retries(-1),
            lambda b: b.ratelimit(0, 1.0),
        ],
    )
    async def test_invalid_options_should_fail(
        self, configure, fake_api: FakeApi
    ) -> None:
        builder = OsuBuilder().client_id(1).client_secret("s")

        with pytest.raises(ClientBuildError):
            await configure(builder).build()

        assert fake_api.call_history == []

    async def test_rejected_credentials_should_fail_and_close_http(
        self, fake_api: FakeApi
    ) -> None:
        """Verifies a failed first token acquisition yields no client.

        Given:
            A token endpoint rejecting the credentials with 401.
        When:
            Building the client.
        Then:
            ClientBuildError wraps the API error and the injected http
            client is closed.
        """
        fake_api.token_status = 401
        http = fake_api.client()
        builder = OsuBuilder().client_id(1).client_secret("bad").http_client(http)

        with pytest.raises(ClientBuildError) as exc_info:
            await builder.build()

        assert isinstance(exc_info.value.cause, ApiResponseError)
        assert http.is_closed

    async def test_from_config_should_seed_builder(
        self, fake_api: FakeApi
    ) -> None:
        config = ClientConfig(
            client_id=9,
            client_secret="cfg-secret",
            timeout=4.0,
            retries=1,
            ratelimit=RateLimitConfig(capacity=3, refill_per_second=3.0),
        )

        builder = OsuBuilder.from_config(config).http_client(fake_api.client())

        osu = await builder.build()

        body = json.loads(fake_api.token_requests[0].content)
        assert body["client_id"] == 9
        assert body["client_secret"] == "cfg-secret"
        assert osu.engine.transport.timeout == 4.0
        assert osu.engine.transport.retries == 1
        assert osu.engine.transport.ratelimiter.capacity == 3.0
        await osu.aclose()

    async def test_from_config_with_code_should_use_redirect_uri(
        self, fake_api: FakeApi
    ) -> None:
        """Verifies a configured redirect uri drives the authorization-code flow.

        Given:
            A config with credentials and a redirect uri.
        When:
            Seeding a builder with a one-time code and building it.
        Then:
            The token request exchanges that code with the configured uri.
        """
        config = ClientConfig(
            client_id=9,
            client_secret="cfg-secret",
            redirect_uri="http://localhost:8000/callback",
        )

        builder = OsuBuilder.from_config(config, code="one-time-code")
        osu = await builder.http_client(fake_api.client()).build()

        body = json.loads(fake_api.token_requests[0].content)
        assert body["grant_type"] == "authorization_code"
        assert body["code"] == "one-time-code"
        assert body["redirect_uri"] == "http://localhost:8000/callback"
        await osu.aclose()

    async def test_from_config_with_code_but_no_redirect_uri_should_fail(
        self,
    ) -> None:
        config = ClientConfig(client_id=9, client_secret="cfg-secret")

        with pytest.raises(ClientBuildError, match="redirect_uri"):
            OsuBuilder.from_config(config, code="one-time-code")

    async def test_refresh_sleep_should_schedule_renewal(
        self, fake_api: FakeApi
    ) -> None:
        """Verifies the injected sleep receives the first renewal delay.

        Given:
            A builder with a recording sleep and a one hour token lifetime.
        When:
            Building the client and letting the renewal task run.
        Then:
            The renewal waits through the injected sleep for 95% of the lifetime.
        """
        fake_api.expires_in = 3600
        delays: list[float] = []
        release = asyncio.Event()

        async def recording_sleep(seconds: float) -> None:
            delays.append(seconds)
            await release.wait()

        osu = await (
            Osu.builder()
            .client_id(123)
            .client_secret("client-secret")
            .http_client(fake_api.client())
            .refresh_sleep(recording_sleep)
            .build()
        )
        await asyncio.sleep(0)

        assert delays == pytest.approx([3420.0])
        assert len(fake_api.token_requests) == 1
        await osu.aclose()


@pytest.mark.unit
@pytest.mark.asyncio
class TestOsuLifecycle:
    async def test_builder_should_return_fresh_builder(self) -> None:
        assert isinstance(Osu.builder(), OsuBuilder)
        assert Osu.builder() is not Osu.builder()

    async def test_close_should_stop_renewal_but_keep_requests_working(
        self, osu_factory, fake_api: FakeApi
    ) -> None:
        """Verifies close() only stops the background renewal.

        Given:
            A built client.
        When:
            Calling close() and then sending a request.
        Then:
            The loop is stopped and the request still succeeds with the
            last token.
        """
        fake_api.add("spotlights", {"spotlights": []})
        osu = await osu_factory()

        osu.close()
        spotlights = await osu.spotlights()

        assert not osu.refresh_loop.running
        assert spotlights == []
        await osu.aclose()

    async def test_context_manager_should_close_everything(
        self, fake_api: FakeApi
    ) -> None:
        http = fake_api.client()
        builder = OsuBuilder().client_id(1).client_secret("s").http_client(http)

        async with await builder.build() as osu:
            assert osu.refresh_loop.running

        assert not osu.refresh_loop.running
        assert http.is_closed

    async def test_request_after_aclose_should_fail(
        self, osu_factory, fake_api: FakeApi
    ) -> None:
        fake_api.add("rankings/osu/score", {"ranking": []})
        osu = await osu_factory()
        await osu.aclose()

        with pytest.raises(RuntimeError):
            await osu.score_rankings(GameMode.OSU)

    async def test_resolve_user_id_should_pass_numeric_ids_through(
        self, osu_factory, fake_api: FakeApi
    ) -> None:
        osu = await osu_factory()

        assert await osu.resolve_user_id(42) == 42
        assert fake_api.api_requests == []
        await osu.aclose()


@pytest.mark.unit
@pytest.mark.asyncio
class TestInjectedHttpClient:
    async def test_http_client_should_receive_all_traffic(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            if request.url.path == "/oauth/token":
                return httpx.Response(
                    200, json={"access_token": "x", "expires_in": 3600}
                )
            return httpx.Response(200, json={"spotlights": []})

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        builder = OsuBuilder().client_id(1).client_secret("s").http_client(http)
        osu = await builder.build()

        await osu.spotlights()
        await osu.aclose()

        assert seen == ["/oauth/token", "/api/v2/spotlights"]
