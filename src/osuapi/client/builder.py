"""Fluent construction of an Osu client."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from osuapi.cache import InMemoryUserCache, UserCache
from osuapi.client.engine import Credentials, RequestEngine
from osuapi.client.osu import Osu
from osuapi.client.ratelimit import RateLimiter
from osuapi.client.token import (
    AuthorizationKind,
    ClientCredentials,
    Scope,
    TokenRefreshLoop,
    UserAuthorization,
)
from osuapi.client.transport import Transport
from osuapi.config.settings import (
    DEFAULT_RATELIMIT,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from osuapi.exceptions import ClientBuildError, OsuError
from osuapi.logger import get_logger
from osuapi.metrics import CounterMetrics, Metrics

logger = get_logger(__name__)


class OsuBuilder:
    """Collects client options and builds an authorized Osu client.

    Usage:
        osu = await (
            Osu.builder()
            .client_id(123)
            .client_secret("secret")
            .timeout(5.0)
            .with_cache()
            .build()
        )
    """

    def __init__(self) -> None:
        self._client_id: int | None = None
        self._client_secret: str | None = None
        self._auth_kind: AuthorizationKind = ClientCredentials()
        self._timeout = DEFAULT_TIMEOUT
        self._retries = DEFAULT_RETRIES
        self._capacity = DEFAULT_RATELIMIT
        self._refill_per_second = float(DEFAULT_RATELIMIT)
        self._cache: UserCache | None = None
        self._metrics: Metrics | None = None
        self._http: httpx.AsyncClient | None = None
        self._refresh_sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep

    @classmethod
    def from_config(
        cls, config: ClientConfig, code: str | None = None
    ) -> "OsuBuilder":
        """Seed a builder from a validated configuration.

        Passing the one-time authorization code switches the builder to the
        authorization-code flow with the configured redirect uri.

        Raises:
            ClientBuildError: If a code is given without a redirect uri.
        """
        builder = (
            cls()
            .timeout(config.timeout)
            .retries(config.retries)
            .ratelimit(config.ratelimit.capacity, config.ratelimit.refill_per_second)
            .scope(config.scope)
        )
        if config.client_id is not None:
            builder.client_id(config.client_id)
        if config.client_secret is not None:
            builder.client_secret(config.client_secret)
        if code is not None:
            if config.redirect_uri is None:
                raise ClientBuildError(
                    "redirect_uri must be configured to use an authorization code"
                )
            builder.with_authorization(code, config.redirect_uri)
        return builder

    def client_id(self, client_id: int) -> "OsuBuilder":
        self._client_id = client_id
        return self

    def client_secret(self, client_secret: str) -> "OsuBuilder":
        self._client_secret = client_secret
        return self

    def with_authorization(self, code: str, redirect_uri: str) -> "OsuBuilder":
        """Use the authorization-code flow instead of client credentials.

        Args:
            code: One-time code obtained through the user redirect.
            redirect_uri: Redirect uri registered for the application.
        """
        self._auth_kind = UserAuthorization(redirect_uri=redirect_uri, code=code)
        return self

    def scope(self, scope: Scope | str) -> "OsuBuilder":
        """Scope requested by the client-credentials flow."""
        value = scope.value if isinstance(scope, Scope) else scope
        if isinstance(self._auth_kind, ClientCredentials):
            self._auth_kind = ClientCredentials(scope=value)
        return self

    def timeout(self, seconds: float) -> "OsuBuilder":
        """Per-attempt timeout. Defaults to 10 seconds."""
        self._timeout = seconds
        return self

    def retries(self, retries: int) -> "OsuBuilder":
        """Retries after a timed out attempt. Defaults to 2."""
        self._retries = retries
        return self

    def ratelimit(self, capacity: int, refill_per_second: float) -> "OsuBuilder":
        """Bucket capacity and refill rate. Defaults to 15 and 15 per second."""
        self._capacity = capacity
        self._refill_per_second = refill_per_second
        return self

    def with_cache(self, cache: UserCache | None = None) -> "OsuBuilder":
        self._cache = cache if cache is not None else InMemoryUserCache()
        return self

    def with_metrics(self, metrics: Metrics | None = None) -> "OsuBuilder":
        self._metrics = metrics if metrics is not None else CounterMetrics()
        return self

    def http_client(self, http: httpx.AsyncClient) -> "OsuBuilder":
        """Send through the given client. The built Osu takes ownership of it."""
        self._http = http
        return self

    def refresh_sleep(self, sleep: Callable[[float], Awaitable[Any]]) -> "OsuBuilder":
        """Coroutine function the token renewal waits with."""
        self._refresh_sleep = sleep
        return self

    def _validate(self) -> Credentials:
        if self._client_id is None:
            raise ClientBuildError("client id must be set")
        if not self._client_secret:
            raise ClientBuildError("client secret must be set")
        if self._timeout <= 0:
            raise ClientBuildError("timeout must be positive")
        if self._retries < 0:
            raise ClientBuildError("retries must not be negative")
        return Credentials(self._client_id, self._client_secret)

    async def build(self) -> Osu:
        """Acquire the first token and return a ready client.

        Returns:
            Authorized client with its token renewal running.

        Raises:
            ClientBuildError: If options are missing or invalid, or if the
                first token acquisition fails.
        """
        credentials = self._validate()

        try:
            ratelimiter = RateLimiter(self._capacity, self._refill_per_second)
        except ValueError as exc:
            raise ClientBuildError("Invalid rate limit", cause=exc) from exc

        http = self._http
        if http is None:
            http = httpx.AsyncClient(timeout=None)
        transport = Transport(http, ratelimiter, self._timeout, self._retries)
        engine = RequestEngine(credentials, self._auth_kind, transport)

        try:
            token = await engine.refresh_token()
        except OsuError as exc:
            logger.error(
                "Initial token acquisition failed: client_id=%d, reason=%s",
                credentials.client_id,
                str(exc),
            )
            await transport.aclose()
            raise ClientBuildError(
                "Failed to acquire initial token", cause=exc
            ) from exc

        loop = TokenRefreshLoop(
            engine.refresh_token, token.expires_in, sleep=self._refresh_sleep
        )
        loop.start()

        logger.info(
            "Client built: client_id=%d, flow=%s, expires_in=%d",
            credentials.client_id,
            type(self._auth_kind).__name__,
            token.expires_in,
        )
        return Osu(engine, loop, cache=self._cache, metrics=self._metrics)
