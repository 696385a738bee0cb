"""Enumerations shared by routes and models."""

from enum import Enum


class GameMode(str, Enum):
    OSU = "osu"
    TAIKO = "taiko"
    CATCH = "fruits"
    MANIA = "mania"


class RankingType(str, Enum):
    CHARTS = "charts"
    COUNTRY = "country"
    PERFORMANCE = "performance"
    SCORE = "score"


class ScoreType(str, Enum):
    """Kind of user scores listed by the user scores endpoint."""

    BEST = "best"
    FIRSTS = "firsts"
    RECENT = "recent"
    PINNED = "pinned"
