"""Ranking endpoints."""

from typing import TYPE_CHECKING, Any

from osuapi.model.enums import GameMode, RankingType
from osuapi.model.ranking import (
    ChartRankings,
    CountryRankings,
    Rankings,
    Spotlight,
    Spotlights,
)
from osuapi.request.base import OsuRequest, Query, Request
from osuapi.routing import Route

if TYPE_CHECKING:
    from osuapi.client.osu import Osu


class GetChartRankings(OsuRequest[ChartRankings]):
    """Get the ranking of a spotlight with its beatmapsets and participants.

    If no spotlight is given, the latest spotlight is returned. The user
    statistics only count scores on maps of the spotlight and are ordered
    by ranked score.
    """

    metric_name = "rankings.charts"
    target = ChartRankings

    def __init__(self, osu: "Osu", mode: GameMode):
        super().__init__(osu)
        self._mode = mode
        self._spotlight: int | None = None

    def spotlight(self, spotlight_id: int) -> "GetChartRankings":
        """Specify the spotlight id."""
        self._ensure_configurable()
        self._spotlight = spotlight_id
        return self

    def build_request(self) -> Request:
        query = Query()
        if self._spotlight is not None:
            query.push("spotlight", self._spotlight)

        route = Route.get_rankings(self._mode, RankingType.CHARTS)
        return Request.from_route(route, query)


class GetCountryRankings(OsuRequest[CountryRankings]):
    """Get countries sorted by their total pp."""

    metric_name = "rankings.country"
    target = CountryRankings

    def __init__(self, osu: "Osu", mode: GameMode):
        super().__init__(osu)
        self._mode = mode
        self._page: int | None = None

    def page(self, page: int) -> "GetCountryRankings":
        self._ensure_configurable()
        self._page = page
        return self

    def build_request(self) -> Request:
        query = Query()
        if self._page is not None:
            query.push("cursor[page]", self._page)

        route = Route.get_rankings(self._mode, RankingType.COUNTRY)
        return Request.from_route(route, query)


class _UserRankings(OsuRequest[Rankings]):
    """Shared plumbing of the pp and ranked score leaderboards."""

    ranking_type: RankingType
    target = Rankings

    def __init__(self, osu: "Osu", mode: GameMode):
        super().__init__(osu)
        self._mode = mode
        self._page: int | None = None

    def page(self, page: int) -> Any:
        """Pages range from 1 to 200."""
        self._ensure_configurable()
        self._page = page
        return self

    def _query(self) -> Query:
        return Query()

    def build_request(self) -> Request:
        query = self._query()
        if self._page is not None:
            query.push("cursor[page]", self._page)

        route = Route.get_rankings(self._mode, self.ranking_type)
        return Request.from_route(route, query)

    def _finish(self, result: Rankings) -> Rankings:
        result.mode = self._mode
        result.ranking_type = self.ranking_type
        return result


class GetPerformanceRankings(_UserRankings):
    """Get user statistics sorted by pp, i.e. the current pp leaderboard."""

    metric_name = "rankings.performance"
    ranking_type = RankingType.PERFORMANCE

    def __init__(self, osu: "Osu", mode: GameMode):
        super().__init__(osu, mode)
        self._country: str | None = None
        self._variant: str | None = None

    def country(self, country: str) -> "GetPerformanceRankings":
        """Specify a two-letter country code."""
        self._ensure_configurable()
        self._country = country
        return self

    def variant_4k(self) -> "GetPerformanceRankings":
        """Only consider 4K scores. Ignored unless the mode is mania."""
        self._ensure_configurable()
        if self._mode == GameMode.MANIA:
            self._variant = "4k"
        return self

    def variant_7k(self) -> "GetPerformanceRankings":
        """Only consider 7K scores. Ignored unless the mode is mania."""
        self._ensure_configurable()
        if self._mode == GameMode.MANIA:
            self._variant = "7k"
        return self

    def _query(self) -> Query:
        query = Query()
        if self._country is not None:
            query.push("country", self._country)
        if self._variant is not None:
            query.push("variant", self._variant)
        return query


class GetScoreRankings(_UserRankings):
    """Get user statistics sorted by ranked score."""

    metric_name = "rankings.score"
    ranking_type = RankingType.SCORE


class GetSpotlights(OsuRequest[list[Spotlight]]):
    """Get every spotlight."""

    metric_name = "spotlights"
    target = Spotlights

    def build_request(self) -> Request:
        return Request.from_route(Route.get_spotlights())

    def _finish(self, result: Spotlights) -> list[Spotlight]:
        return result.spotlights
