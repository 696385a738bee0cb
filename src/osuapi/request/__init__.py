"""Lazy endpoint requests.

This package provides the raw request shape, the awaitable request
protocol, and the endpoint requests built on top of it.
"""

from osuapi.request.base import (
    OsuRawRequest,
    OsuRequest,
    Query,
    Request,
    RequestState,
)
from osuapi.request.beatmap import GetBeatmap, GetBeatmapScores, GetBeatmapset
from osuapi.request.news import GetNews, GetSeasonalBackgrounds
from osuapi.request.ranking import (
    GetChartRankings,
    GetCountryRankings,
    GetPerformanceRankings,
    GetScoreRankings,
    GetSpotlights,
)
from osuapi.request.score import GetReplayRaw, GetScore
from osuapi.request.user import GetOwnData, GetUser, GetUserScores, UserId

__all__ = [
    "GetBeatmap",
    "GetBeatmapScores",
    "GetBeatmapset",
    "GetChartRankings",
    "GetCountryRankings",
    "GetNews",
    "GetOwnData",
    "GetPerformanceRankings",
    "GetReplayRaw",
    "GetScore",
    "GetScoreRankings",
    "GetSeasonalBackgrounds",
    "GetSpotlights",
    "GetUser",
    "GetUserScores",
    "OsuRawRequest",
    "OsuRequest",
    "Query",
    "Request",
    "RequestState",
    "UserId",
]
