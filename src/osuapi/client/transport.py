"""Network exchange with per-attempt timeout and bounded retry."""

import asyncio

import httpx

from osuapi.client.ratelimit import RateLimiter
from osuapi.exceptions import RequestTimeoutError, TransportError
from osuapi.logger import get_logger

logger = get_logger(__name__)


def clone_request(request: httpx.Request) -> httpx.Request:
    """Copy a fully built request so it can be sent again.

    Args:
        request: Request whose body has already been read into memory.

    Returns:
        Independent request with the same method, url, headers and body.
    """
    return httpx.Request(
        method=request.method,
        url=request.url,
        headers=request.headers.copy(),
        content=request.content,
        extensions=dict(request.extensions),
    )


class Transport:
    """Sends requests through the rate limiter with timeout-based retry.

    Every call acquires exactly one unit from the rate limiter before the
    first attempt. Timed out attempts are retried immediately until the
    retry budget is spent; any other network failure is raised at once.

    Attributes:
        timeout: Per-attempt timeout in seconds.
        retries: Number of retries after a timed out attempt.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        ratelimiter: RateLimiter,
        timeout: float,
        retries: int,
    ):
        self._http = http
        self._ratelimiter = ratelimiter
        self.timeout = timeout
        self.retries = retries

    @property
    def ratelimiter(self) -> RateLimiter:
        return self._ratelimiter

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send a request and return the response with its body read.

        Args:
            request: Fully built request.

        Returns:
            Response of the first attempt that did not time out.

        Raises:
            RequestTimeoutError: If every attempt timed out.
            TransportError: On connection, TLS or protocol failures.
        """
        await self._ratelimiter.acquire_one()

        attempt = 0
        while True:
            attempt_request = clone_request(request)
            try:
                return await asyncio.wait_for(
                    self._http.send(attempt_request), self.timeout
                )
            except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
                if attempt < self.retries:
                    logger.warning(
                        "Request timed out, retrying: attempt=%d, url=%s",
                        attempt,
                        request.url,
                    )
                    attempt += 1
                    continue

                logger.error(
                    "Request timed out: attempts=%d, url=%s", attempt + 1, request.url
                )
                raise RequestTimeoutError(attempt + 1) from exc
            except httpx.HTTPError as exc:
                logger.error(
                    "Request failed: url=%s, reason=%s", request.url, type(exc).__name__
                )
                raise TransportError("Failed to send request", cause=exc) from exc

    async def aclose(self) -> None:
        await self._http.aclose()
