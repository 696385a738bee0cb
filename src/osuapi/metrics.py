"""Request counters.

Purely observational: one counter per endpoint invocation plus the
number of cache insertions. Nothing in the request path depends on the
recorded values.
"""

from collections import Counter
from typing import Protocol

CACHE_SIZE = "cache_size"


class Metrics(Protocol):
    def increment(self, name: str) -> None: ...


class NoopMetrics:
    """Discards every increment."""

    def increment(self, name: str) -> None:
        return None


class CounterMetrics:
    """In-memory counters keyed by endpoint name.

    Attributes:
        namespace: Prefix reported by ``snapshot()`` keys.
    """

    def __init__(self, namespace: str = "osu_requests") -> None:
        self.namespace = namespace
        self._counts: Counter[str] = Counter()

    def increment(self, name: str) -> None:
        self._counts[name] += 1

    def get(self, name: str) -> int:
        return self._counts[name]

    def snapshot(self) -> dict[str, int]:
        """Current counter values keyed as ``namespace.name``."""
        return {
            f"{self.namespace}.{name}": count
            for name, count in sorted(self._counts.items())
        }

    def reset(self) -> None:
        self._counts.clear()
