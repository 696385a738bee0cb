"""News and seasonal background models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from osuapi.model.user import UserCompact


class NewsPost(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    news_id: int = Field(..., alias="id")
    title: str | None = Field(default=None)
    slug: str | None = Field(default=None)
    author: str | None = Field(default=None)
    published_at: datetime | None = Field(default=None)
    preview: str | None = Field(default=None)


class News(BaseModel):
    model_config = ConfigDict(extra="ignore")

    posts: list[NewsPost] = Field(default_factory=list, alias="news_posts")
    cursor: dict[str, Any] | None = Field(default=None)


class SeasonalBackground(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str
    user: UserCompact | None = Field(default=None)


class SeasonalBackgrounds(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ends_at: datetime | None = Field(default=None)
    backgrounds: list[SeasonalBackground] = Field(default_factory=list)
