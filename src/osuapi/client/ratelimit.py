"""Rate limiting for outbound API calls."""

import asyncio
import time
from collections.abc import Awaitable, Callable

from osuapi.config.settings import RateLimitConfig


class RateLimiter:
    """Leaky bucket rate limiter shared by every outbound request.

    Allows an initial burst up to the bucket capacity, then admits
    requests at the refill rate. Waiters are serialized on an internal
    lock, so the aggregate send rate never exceeds the bucket bound.

    Attributes:
        capacity: Maximum number of units held by the bucket.
        rate: Units added per second.
        tokens: Current available units.
        last_update: Last refill timestamp.
    """

    def __init__(
        self,
        capacity: int,
        refill_per_second: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the bucket full.

        Args:
            capacity: Burst size.
            refill_per_second: Maximum sustained request rate.
            clock: Monotonic time source in seconds.
            sleep: Coroutine function used to wait for a refill.
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if refill_per_second <= 0:
            raise ValueError("refill_per_second must be positive")

        self.capacity = float(capacity)
        self.rate = refill_per_second
        self.tokens = float(capacity)
        self._clock = clock
        self._sleep = sleep
        self.last_update = clock()
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: RateLimitConfig) -> "RateLimiter":
        return cls(config.capacity, config.refill_per_second)

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self.last_update
        self.tokens = min(self.capacity, self.tokens + elapsed * self.rate)
        self.last_update = now

    @property
    def available(self) -> float:
        """Units currently available without waiting."""
        self._refill()
        return self.tokens

    async def acquire_one(self) -> None:
        """Wait until one unit is available and consume it.

        Never fails and never times out; callers bound the total wait
        with their own timeout if needed.
        """
        async with self._lock:
            self._refill()

            if self.tokens >= 1.0:
                self.tokens -= 1.0
                return

            wait_time = (1.0 - self.tokens) / self.rate
            await self._sleep(wait_time)
            self._refill()
            self.tokens = max(0.0, self.tokens - 1.0)
