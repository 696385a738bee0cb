"""Beatmap endpoints."""

from typing import TYPE_CHECKING

from osuapi.exceptions import InvalidRequestError
from osuapi.model.beatmap import Beatmap, Beatmapset
from osuapi.model.enums import GameMode
from osuapi.model.score import BeatmapScores, Score
from osuapi.request.base import OsuRequest, Query, Request
from osuapi.routing import Route

if TYPE_CHECKING:
    from osuapi.client.osu import Osu


class GetBeatmap(OsuRequest[Beatmap]):
    """Look up a beatmap by id, md5 checksum or filename.

    At least one of the three must be set before awaiting.
    """

    metric_name = "beatmap"
    target = Beatmap

    def __init__(self, osu: "Osu"):
        super().__init__(osu)
        self._map_id: int | None = None
        self._checksum: str | None = None
        self._filename: str | None = None

    def map_id(self, map_id: int) -> "GetBeatmap":
        self._ensure_configurable()
        self._map_id = map_id
        return self

    def checksum(self, checksum: str) -> "GetBeatmap":
        self._ensure_configurable()
        self._checksum = checksum
        return self

    def filename(self, filename: str) -> "GetBeatmap":
        self._ensure_configurable()
        self._filename = filename
        return self

    def build_request(self) -> Request:
        query = Query()
        if self._checksum is not None:
            query.push("checksum", self._checksum)
        if self._filename is not None:
            query.push("filename", self._filename)
        if self._map_id is not None:
            query.push("id", self._map_id)

        if not query:
            raise InvalidRequestError(
                type(self).__name__, "an id, checksum or filename is required"
            )

        return Request.from_route(Route.get_beatmap(), query)


class GetBeatmapScores(OsuRequest[list[Score]]):
    """Get the global top scores of a beatmap."""

    metric_name = "beatmap_scores"
    target = BeatmapScores

    def __init__(self, osu: "Osu", map_id: int):
        super().__init__(osu)
        self._map_id = map_id
        self._mode: GameMode | None = None
        self._mods: list[str] = []

    def mode(self, mode: GameMode) -> "GetBeatmapScores":
        self._ensure_configurable()
        self._mode = mode
        return self

    def mods(self, *acronyms: str) -> "GetBeatmapScores":
        """Only include scores with exactly these mods, e.g. ``"HD", "DT"``."""
        self._ensure_configurable()
        self._mods = [acronym.upper() for acronym in acronyms]
        return self

    def build_request(self) -> Request:
        query = Query()
        if self._mode is not None:
            query.push("mode", self._mode.value)
        for acronym in self._mods:
            query.push("mods[]", acronym)

        return Request.from_route(Route.get_beatmap_scores(self._map_id), query)

    def _finish(self, result: BeatmapScores) -> list[Score]:
        return result.scores


class GetBeatmapset(OsuRequest[Beatmapset]):
    metric_name = "beatmapset"
    target = Beatmapset

    def __init__(self, osu: "Osu", mapset_id: int):
        super().__init__(osu)
        self._mapset_id = mapset_id

    def build_request(self) -> Request:
        return Request.from_route(Route.get_beatmapset(self._mapset_id))
