"""Raw request shape and the lazy request protocol.

Every endpoint reduces to a ``Request`` (method, path, query, body)
before reaching the engine. Endpoint objects are returned synchronously
by the client and only start their network call when first awaited.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from collections.abc import Generator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar
from urllib.parse import urlencode

from osuapi.exceptions import RequestStartedError
from osuapi.logger import get_logger
from osuapi.routing import Method, Route

if TYPE_CHECKING:
    from osuapi.client.osu import Osu

logger = get_logger(__name__)

T = TypeVar("T")


class Query:
    """Ordered query parameters rendered as ``?key=value&...``."""

    def __init__(self) -> None:
        self._params: list[tuple[str, str]] = []

    def push(self, key: str, value: Any) -> "Query":
        if isinstance(value, bool):
            value = "true" if value else "false"
        self._params.append((key, str(value)))
        return self

    def __len__(self) -> int:
        return len(self._params)

    def __bool__(self) -> bool:
        return bool(self._params)

    def __iter__(self):
        return iter(self._params)

    def __str__(self) -> str:
        if not self._params:
            return ""
        return "?" + urlencode(self._params)

    def __repr__(self) -> str:
        return f"Query({self._params!r})"


@dataclass(frozen=True)
class Request:
    """Universal request shape handed to the engine.

    Attributes:
        method: HTTP method.
        path: Path relative to the API base, without leading slash.
        query: Rendered query string, empty or starting with "?".
        body: JSON body bytes, empty for bodiless requests.
    """

    method: Method
    path: str
    query: str = ""
    body: bytes = b""

    @classmethod
    def from_route(cls, route: Route, query: Query | None = None) -> "Request":
        return cls(
            method=route.method,
            path=route.path,
            query=str(query) if query is not None else "",
        )

    def with_json(self, payload: Any) -> "Request":
        return Request(
            method=self.method,
            path=self.path,
            query=self.query,
            body=json.dumps(payload).encode("utf-8"),
        )


class RequestState(str, Enum):
    NOT_STARTED = "not_started"
    IN_FLIGHT = "in_flight"
    DONE = "done"


class OsuRequest(ABC, Generic[T]):
    """Awaitable endpoint request that starts at most once.

    Subclasses accumulate parameters through fluent methods, each of
    which must call ``_ensure_configurable()`` first, and implement
    ``build_request()``. Awaiting the object (or calling ``start()``)
    creates the underlying task on first use; later awaits reuse it.

    Attributes:
        metric_name: Counter incremented when the request starts.
        target: Type the success body is validated into.
    """

    metric_name: ClassVar[str] = ""
    target: ClassVar[Any] = Any

    def __init__(self, osu: "Osu"):
        self._osu = osu
        self._task: asyncio.Task[T] | None = None

    @property
    def state(self) -> RequestState:
        if self._task is None:
            return RequestState.NOT_STARTED
        if self._task.done():
            return RequestState.DONE
        return RequestState.IN_FLIGHT

    def _ensure_configurable(self) -> None:
        if self._task is not None:
            raise RequestStartedError(type(self).__name__)

    @abstractmethod
    def build_request(self) -> Request:
        """Produce the raw request from the accumulated parameters."""
        pass

    def _finish(self, result: Any) -> T:
        """Post-process the deserialized result."""
        return result

    async def _execute(self) -> T:
        result = await self._osu.request(self.build_request(), self.target)
        return self._finish(result)

    def start(self) -> "asyncio.Task[T]":
        """Start the request if needed and return its task.

        Returns:
            The single task backing this request.
        """
        if self._task is None:
            if self.metric_name:
                self._osu.metrics.increment(self.metric_name)
            self._task = asyncio.ensure_future(self._execute())
            logger.debug("Request started: endpoint=%s", type(self).__name__)
        return self._task

    def __await__(self) -> Generator[Any, None, T]:
        # Cancelling one awaiter must leave the shared task running
        return asyncio.shield(self.start()).__await__()


class OsuRawRequest(OsuRequest[bytes]):
    """Lazy request returning the raw success body instead of a model."""

    async def _execute(self) -> bytes:
        return await self._osu.request_raw(self.build_request())
