"""Score data models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from osuapi.model.beatmap import Beatmap, Beatmapset
from osuapi.model.user import UserCompact


class Score(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    score_id: int | None = Field(default=None, alias="id")
    user_id: int | None = Field(default=None)
    accuracy: float | None = Field(default=None)
    max_combo: int | None = Field(default=None)
    mods: list[Any] = Field(default_factory=list)
    pp: float | None = Field(default=None)
    rank: str | None = Field(default=None, description="Letter grade")
    mode: str | None = Field(default=None)
    ended_at: datetime | None = Field(default=None)
    user: UserCompact | None = Field(default=None)
    beatmap: Beatmap | None = Field(default=None)
    mapset: Beatmapset | None = Field(default=None, alias="beatmapset")


class BeatmapScores(BaseModel):
    model_config = ConfigDict(extra="ignore")

    scores: list[Score] = Field(default_factory=list)
