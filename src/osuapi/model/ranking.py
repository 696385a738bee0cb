"""Ranking data models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from osuapi.model.beatmap import Beatmapset
from osuapi.model.enums import GameMode, RankingType
from osuapi.model.user import UserStatistics


class Rankings(BaseModel):
    """User statistics ordered by pp or ranked score.

    The API does not echo the mode or ranking type, so both are stamped
    onto the result by the request that fetched it.
    """

    model_config = ConfigDict(extra="ignore")

    ranking: list[UserStatistics] = Field(default_factory=list)
    cursor: dict[str, Any] | None = Field(default=None)
    total: int | None = Field(default=None)
    mode: GameMode | None = Field(default=None)
    ranking_type: RankingType | None = Field(default=None)


class CountryRanking(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str = Field(..., description="Two-letter country code")
    active_users: int | None = Field(default=None)
    play_count: int | None = Field(default=None)
    ranked_score: int | None = Field(default=None)
    performance: float | None = Field(default=None)


class CountryRankings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ranking: list[CountryRanking] = Field(default_factory=list)
    cursor: dict[str, Any] | None = Field(default=None)
    total: int | None = Field(default=None)


class Spotlight(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    spotlight_id: int = Field(..., alias="id")
    name: str = Field(...)
    kind: str | None = Field(default=None, alias="type")
    start_date: datetime | None = Field(default=None)
    end_date: datetime | None = Field(default=None)
    mode_specific: bool | None = Field(default=None)
    participant_count: int | None = Field(default=None)


class ChartRankings(BaseModel):
    """Spotlight ranking with its beatmapsets and participants."""

    model_config = ConfigDict(extra="ignore")

    mapsets: list[Beatmapset] = Field(default_factory=list, alias="beatmapsets")
    ranking: list[UserStatistics] = Field(default_factory=list)
    spotlight: Spotlight | None = Field(default=None)


class Spotlights(BaseModel):
    model_config = ConfigDict(extra="ignore")

    spotlights: list[Spotlight] = Field(default_factory=list)
