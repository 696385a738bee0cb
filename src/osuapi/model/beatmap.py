"""Beatmap data models."""

from pydantic import BaseModel, ConfigDict, Field


class Beatmap(BaseModel):
    """A single difficulty of a beatmapset."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    map_id: int = Field(..., alias="id")
    mapset_id: int | None = Field(default=None, alias="beatmapset_id")
    mode: str | None = Field(default=None)
    version: str | None = Field(default=None, description="Difficulty name")
    difficulty_rating: float | None = Field(default=None)
    checksum: str | None = Field(default=None)
    status: str | None = Field(default=None)
    total_length: int | None = Field(default=None, description="Length in seconds")


class Beatmapset(BaseModel):
    """A beatmapset and, when requested, its difficulties."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    mapset_id: int = Field(..., alias="id")
    artist: str | None = Field(default=None)
    title: str | None = Field(default=None)
    creator: str | None = Field(default=None)
    status: str | None = Field(default=None)
    maps: list[Beatmap] | None = Field(default=None, alias="beatmaps")
