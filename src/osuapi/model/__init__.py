"""Typed models for API payloads."""

from osuapi.model.beatmap import Beatmap, Beatmapset
from osuapi.model.enums import GameMode, RankingType, ScoreType
from osuapi.model.news import News, NewsPost, SeasonalBackground, SeasonalBackgrounds
from osuapi.model.ranking import (
    ChartRankings,
    CountryRanking,
    CountryRankings,
    Rankings,
    Spotlight,
    Spotlights,
)
from osuapi.model.score import BeatmapScores, Score
from osuapi.model.user import User, UserCompact, UserStatistics

__all__ = [
    "Beatmap",
    "Beatmapset",
    "BeatmapScores",
    "ChartRankings",
    "CountryRanking",
    "CountryRankings",
    "GameMode",
    "News",
    "NewsPost",
    "RankingType",
    "Rankings",
    "Score",
    "ScoreType",
    "SeasonalBackground",
    "SeasonalBackgrounds",
    "Spotlight",
    "Spotlights",
    "User",
    "UserCompact",
    "UserStatistics",
]
