"""News and seasonal background endpoints."""

from typing import TYPE_CHECKING

from osuapi.model.news import News, SeasonalBackgrounds
from osuapi.request.base import OsuRequest, Query, Request
from osuapi.routing import Route

if TYPE_CHECKING:
    from osuapi.client.osu import Osu


class GetNews(OsuRequest[News]):
    """Get a listing of news posts, newest first."""

    metric_name = "news"
    target = News

    def __init__(self, osu: "Osu"):
        super().__init__(osu)
        self._limit: int | None = None
        self._year: int | None = None

    def limit(self, limit: int) -> "GetNews":
        """Number of posts to return. The API defaults to 12."""
        self._ensure_configurable()
        self._limit = limit
        return self

    def year(self, year: int) -> "GetNews":
        self._ensure_configurable()
        self._year = year
        return self

    def build_request(self) -> Request:
        query = Query()
        if self._limit is not None:
            query.push("limit", self._limit)
        if self._year is not None:
            query.push("year", self._year)

        return Request.from_route(Route.get_news(), query)


class GetSeasonalBackgrounds(OsuRequest[SeasonalBackgrounds]):
    metric_name = "seasonal_backgrounds"
    target = SeasonalBackgrounds

    def build_request(self) -> Request:
        return Request.from_route(Route.get_seasonal_backgrounds())
