"""The main client.

Endpoint methods return lazy requests immediately; nothing touches the
network until a request is awaited.
"""

from typing import TYPE_CHECKING, Any, TypeVar

from osuapi.cache import NoopUserCache, UserCache
from osuapi.client.engine import RequestEngine
from osuapi.client.token import TokenRefreshLoop
from osuapi.logger import get_logger
from osuapi.metrics import CACHE_SIZE, Metrics, NoopMetrics
from osuapi.model.enums import GameMode
from osuapi.request import (
    GetBeatmap,
    GetBeatmapScores,
    GetBeatmapset,
    GetChartRankings,
    GetCountryRankings,
    GetNews,
    GetOwnData,
    GetPerformanceRankings,
    GetReplayRaw,
    GetScore,
    GetScoreRankings,
    GetSeasonalBackgrounds,
    GetSpotlights,
    GetUser,
    GetUserScores,
    Request,
    UserId,
)

if TYPE_CHECKING:
    from osuapi.client.builder import OsuBuilder

logger = get_logger(__name__)

T = TypeVar("T")


class Osu:
    """Authenticated client for the osu! API v2.

    Build one with ``await Osu.new(client_id, client_secret)`` or through
    ``Osu.builder()``. Construction acquires the first token and starts
    the background renewal; ``close()`` stops the renewal, ``aclose()``
    additionally releases the connection pool.

    Attributes:
        cache: Username cache (no-op unless enabled on the builder).
        metrics: Request counters (no-op unless enabled on the builder).
    """

    def __init__(
        self,
        engine: RequestEngine,
        refresh_loop: TokenRefreshLoop,
        cache: UserCache | None = None,
        metrics: Metrics | None = None,
    ):
        self._engine = engine
        self._refresh_loop = refresh_loop
        self.cache: UserCache = cache if cache is not None else NoopUserCache()
        self.metrics: Metrics = metrics if metrics is not None else NoopMetrics()

    @classmethod
    async def new(cls, client_id: int, client_secret: str) -> "Osu":
        """Create a client with default settings.

        Raises:
            ClientBuildError: If the API did not provide a token for the
                given client id and client secret.
        """
        builder = cls.builder().client_id(client_id).client_secret(client_secret)
        return await builder.build()

    @staticmethod
    def builder() -> "OsuBuilder":
        from osuapi.client.builder import OsuBuilder

        return OsuBuilder()

    @property
    def engine(self) -> RequestEngine:
        return self._engine

    @property
    def refresh_loop(self) -> TokenRefreshLoop:
        return self._refresh_loop

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def beatmap(self) -> GetBeatmap:
        """Look up a beatmap; set ``map_id``, ``checksum`` or ``filename``."""
        return GetBeatmap(self)

    def beatmap_scores(self, map_id: int) -> GetBeatmapScores:
        return GetBeatmapScores(self, map_id)

    def beatmapset(self, mapset_id: int) -> GetBeatmapset:
        return GetBeatmapset(self, mapset_id)

    def chart_rankings(self, mode: GameMode) -> GetChartRankings:
        return GetChartRankings(self, mode)

    def country_rankings(self, mode: GameMode) -> GetCountryRankings:
        return GetCountryRankings(self, mode)

    def news(self) -> GetNews:
        return GetNews(self)

    def own_data(self) -> GetOwnData:
        """Get the authorized user. Requires the authorization-code flow."""
        return GetOwnData(self)

    def performance_rankings(self, mode: GameMode) -> GetPerformanceRankings:
        return GetPerformanceRankings(self, mode)

    def replay_raw(self, mode: GameMode, score_id: int) -> GetReplayRaw:
        return GetReplayRaw(self, mode, score_id)

    def score(self, score_id: int, mode: GameMode) -> GetScore:
        return GetScore(self, score_id, mode)

    def score_rankings(self, mode: GameMode) -> GetScoreRankings:
        return GetScoreRankings(self, mode)

    def seasonal_backgrounds(self) -> GetSeasonalBackgrounds:
        return GetSeasonalBackgrounds(self)

    def spotlights(self) -> GetSpotlights:
        return GetSpotlights(self)

    def user(self, user_id: UserId) -> GetUser:
        """Get a user by numeric id or by username."""
        return GetUser(self, user_id)

    def user_scores(self, user_id: UserId) -> GetUserScores:
        return GetUserScores(self, user_id)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def resolve_user_id(self, user_id: UserId) -> int:
        """Turn a username into a user id, using the cache when possible.

        Args:
            user_id: Numeric id (returned as is) or username.

        Returns:
            The numeric user id.
        """
        if isinstance(user_id, int):
            return user_id

        cached = self.cache.lookup(user_id)
        if cached is not None:
            return cached

        user = await self.user(user_id)
        # Concurrent lookups of the same name may both increment
        self.metrics.increment(CACHE_SIZE)
        return user.user_id

    def update_cache(self, user_id: int, username: str) -> None:
        self.cache.insert(username, user_id)

    async def request(self, raw: Request, target: type[T]) -> T:
        return await self._engine.execute(raw, target)

    async def request_raw(self, raw: Request) -> bytes:
        return await self._engine.execute_raw(raw)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Stop the token renewal without waiting for it to exit.

        In-flight requests are not cancelled.
        """
        self._refresh_loop.stop()

    async def aclose(self) -> None:
        """Stop the token renewal and close the connection pool."""
        self.close()
        await self._engine.aclose()
        logger.debug("Client closed")

    async def __aenter__(self) -> "Osu":
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: Any,
    ) -> None:
        await self.aclose()
