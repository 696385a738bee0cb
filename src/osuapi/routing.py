"""Endpoint routes: HTTP method plus path relative to the API base."""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

from osuapi.model.enums import GameMode, RankingType, ScoreType


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Route:
    method: Method
    path: str

    @classmethod
    def get_beatmap(cls) -> "Route":
        return cls(Method.GET, "beatmaps/lookup")

    @classmethod
    def get_beatmap_scores(cls, map_id: int) -> "Route":
        return cls(Method.GET, f"beatmaps/{map_id}/scores")

    @classmethod
    def get_beatmapset(cls, mapset_id: int) -> "Route":
        return cls(Method.GET, f"beatmapsets/{mapset_id}")

    @classmethod
    def get_news(cls) -> "Route":
        return cls(Method.GET, "news")

    @classmethod
    def get_own_data(cls, mode: GameMode | None = None) -> "Route":
        if mode is None:
            return cls(Method.GET, "me")
        return cls(Method.GET, f"me/{mode.value}")

    @classmethod
    def get_rankings(cls, mode: GameMode, ranking_type: RankingType) -> "Route":
        return cls(Method.GET, f"rankings/{mode.value}/{ranking_type.value}")

    @classmethod
    def get_replay(cls, mode: GameMode, score_id: int) -> "Route":
        return cls(Method.GET, f"scores/{mode.value}/{score_id}/download")

    @classmethod
    def get_score(cls, mode: GameMode, score_id: int) -> "Route":
        return cls(Method.GET, f"scores/{mode.value}/{score_id}")

    @classmethod
    def get_seasonal_backgrounds(cls) -> "Route":
        return cls(Method.GET, "seasonal-backgrounds")

    @classmethod
    def get_spotlights(cls) -> "Route":
        return cls(Method.GET, "spotlights")

    @classmethod
    def get_user(cls, user: int | str, mode: GameMode | None = None) -> "Route":
        path = f"users/{quote(str(user), safe='')}"
        if mode is None:
            return cls(Method.GET, path)
        return cls(Method.GET, f"{path}/{mode.value}")

    @classmethod
    def get_user_scores(cls, user_id: int, score_type: ScoreType) -> "Route":
        return cls(Method.GET, f"users/{user_id}/scores/{score_type.value}")
