"""User data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCompact(BaseModel):
    """Minimal user representation embedded in other payloads.

    Attributes:
        user_id: Numeric user id.
        username: Current username.
        country_code: Two-letter country code.
        avatar_url: Url of the user's avatar.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user_id: int = Field(..., alias="id", description="Numeric user id")
    username: str = Field(..., description="Current username")
    country_code: str | None = Field(default=None)
    avatar_url: str | None = Field(default=None)


class UserStatistics(BaseModel):
    """Per-mode statistics of a user.

    Attributes:
        pp: Performance points.
        global_rank: Global performance rank.
        ranked_score: Total ranked score.
        hit_accuracy: Overall accuracy in percent.
        play_count: Number of plays.
        user: Owner of the statistics, filled on ranking payloads.
    """

    model_config = ConfigDict(extra="ignore")

    pp: float | None = Field(default=None)
    global_rank: int | None = Field(default=None)
    ranked_score: int | None = Field(default=None)
    hit_accuracy: float | None = Field(default=None)
    play_count: int | None = Field(default=None)
    user: UserCompact | None = Field(default=None)


class User(UserCompact):
    """Full user profile."""

    playmode: str | None = Field(default=None, description="Default game mode")
    join_date: datetime | None = Field(default=None)
    previous_usernames: list[str] = Field(default_factory=list)
    statistics: UserStatistics | None = Field(default=None)
