"""Username to user id cache.

Endpoints accepting either an id or a username consult the cache before
spending a lookup round-trip. Usernames are ASCII-only and compared
case-insensitively.
"""

from typing import Protocol

from osuapi.logger import get_logger

logger = get_logger(__name__)


def normalize_username(name: str) -> str:
    """ASCII-lowercase a username for use as a cache key."""
    return "".join(ch.lower() if ch.isascii() else ch for ch in name)


class UserCache(Protocol):
    def lookup(self, name: str) -> int | None: ...

    def insert(self, name: str, user_id: int) -> None: ...


class NoopUserCache:
    """Cache that never remembers anything."""

    def lookup(self, name: str) -> int | None:
        return None

    def insert(self, name: str, user_id: int) -> None:
        return None


class InMemoryUserCache:
    """Process-local username cache.

    Concurrent inserts for the same name are last-write-wins.
    """

    def __init__(self) -> None:
        self._entries: dict[str, int] = {}

    def lookup(self, name: str) -> int | None:
        return self._entries.get(normalize_username(name))

    def insert(self, name: str, user_id: int) -> None:
        key = normalize_username(name)
        self._entries[key] = user_id
        logger.debug("User cached: name=%s, user_id=%d", key, user_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_username(name) in self._entries

    def clear(self) -> None:
        self._entries.clear()
