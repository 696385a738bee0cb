"""Score endpoints."""

from typing import TYPE_CHECKING

from osuapi.model.enums import GameMode
from osuapi.model.score import Score
from osuapi.request.base import OsuRawRequest, OsuRequest, Request
from osuapi.routing import Route

if TYPE_CHECKING:
    from osuapi.client.osu import Osu


class GetScore(OsuRequest[Score]):
    metric_name = "score"
    target = Score

    def __init__(self, osu: "Osu", score_id: int, mode: GameMode):
        super().__init__(osu)
        self._score_id = score_id
        self._mode = mode

    def build_request(self) -> Request:
        return Request.from_route(Route.get_score(self._mode, self._score_id))


class GetReplayRaw(OsuRawRequest):
    """Download the replay file of a score as raw bytes.

    Requires an authorization with access to replay downloads.
    """

    metric_name = "replay"

    def __init__(self, osu: "Osu", mode: GameMode, score_id: int):
        super().__init__(osu)
        self._mode = mode
        self._score_id = score_id

    def build_request(self) -> Request:
        return Request.from_route(Route.get_replay(self._mode, self._score_id))
