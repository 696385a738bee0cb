"""User endpoints."""

from typing import TYPE_CHECKING

from osuapi.exceptions import InvalidRequestError
from osuapi.model.enums import GameMode, ScoreType
from osuapi.model.score import Score
from osuapi.model.user import User
from osuapi.request.base import OsuRequest, Query, Request
from osuapi.routing import Route

if TYPE_CHECKING:
    from osuapi.client.osu import Osu

UserId = int | str


class GetUser(OsuRequest[User]):
    """Get a user by id or username.

    A successful lookup refreshes the username cache.
    """

    metric_name = "user"
    target = User

    def __init__(self, osu: "Osu", user_id: UserId):
        super().__init__(osu)
        self._user_id = user_id
        self._mode: GameMode | None = None

    def mode(self, mode: GameMode) -> "GetUser":
        """Statistics of the given mode instead of the user's default mode."""
        self._ensure_configurable()
        self._mode = mode
        return self

    def build_request(self) -> Request:
        query = Query()
        if isinstance(self._user_id, int):
            query.push("key", "id")
        else:
            query.push("key", "username")

        return Request.from_route(Route.get_user(self._user_id, self._mode), query)

    def _finish(self, result: User) -> User:
        self._osu.update_cache(result.user_id, result.username)
        return result


class GetOwnData(OsuRequest[User]):
    """Get the user the client is authorized as.

    Only available with the authorization-code flow.
    """

    metric_name = "own_data"
    target = User

    def __init__(self, osu: "Osu"):
        super().__init__(osu)
        self._mode: GameMode | None = None

    def mode(self, mode: GameMode) -> "GetOwnData":
        self._ensure_configurable()
        self._mode = mode
        return self

    def build_request(self) -> Request:
        return Request.from_route(Route.get_own_data(self._mode))


class GetUserScores(OsuRequest[list[Score]]):
    """Get scores of a user.

    Lists best scores unless another kind is selected. Usernames are
    resolved to ids through the client cache first.
    """

    metric_name = "user_scores"
    target = list[Score]

    def __init__(self, osu: "Osu", user_id: UserId):
        super().__init__(osu)
        self._user_id = user_id
        self._score_type = ScoreType.BEST
        self._limit: int | None = None
        self._offset: int | None = None
        self._include_fails: bool | None = None
        self._mode: GameMode | None = None

    def _kind(self, score_type: ScoreType) -> "GetUserScores":
        self._ensure_configurable()
        self._score_type = score_type
        return self

    def best(self) -> "GetUserScores":
        return self._kind(ScoreType.BEST)

    def firsts(self) -> "GetUserScores":
        return self._kind(ScoreType.FIRSTS)

    def recent(self) -> "GetUserScores":
        return self._kind(ScoreType.RECENT)

    def pinned(self) -> "GetUserScores":
        return self._kind(ScoreType.PINNED)

    def limit(self, limit: int) -> "GetUserScores":
        self._ensure_configurable()
        self._limit = limit
        return self

    def offset(self, offset: int) -> "GetUserScores":
        self._ensure_configurable()
        self._offset = offset
        return self

    def include_fails(self, include_fails: bool) -> "GetUserScores":
        """Only relevant for recent scores."""
        self._ensure_configurable()
        self._include_fails = include_fails
        return self

    def mode(self, mode: GameMode) -> "GetUserScores":
        self._ensure_configurable()
        self._mode = mode
        return self

    def build_request(self) -> Request:
        if not isinstance(self._user_id, int):
            raise InvalidRequestError(
                type(self).__name__, "the username has not been resolved to an id"
            )

        query = Query()
        if self._limit is not None:
            query.push("limit", self._limit)
        if self._offset is not None:
            query.push("offset", self._offset)
        if self._include_fails is not None:
            query.push("include_fails", int(self._include_fails))
        if self._mode is not None:
            query.push("mode", self._mode.value)

        route = Route.get_user_scores(self._user_id, self._score_type)
        return Request.from_route(route, query)

    async def _execute(self) -> list[Score]:
        self._user_id = await self._osu.resolve_user_id(self._user_id)
        return await super()._execute()
