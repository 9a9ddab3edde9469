"""Key-value adapters holding serialized sessions with a native per-key expiry."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from redis.asyncio import Redis

from tasktrack.utils import now_ms


class SessionStore(Protocol):
    """Remote key-value store with per-key TTL.

    Every call is a full round-trip; adapters keep no cache. Backend failures
    propagate to the caller unchanged.
    """

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` and let the backend evict it after ``ttl_seconds``."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent or evicted."""

    async def delete(self, key: str) -> None:
        """Remove ``key``. Deleting an absent key is not an error."""


class RedisSessionStore(SessionStore):
    """Redis-backed store; expiry is delegated to ``SET ... EX``."""

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._redis.set(key, value, ex=ttl_seconds)

    async def get(self, key: str) -> str | None:
        value = await self._redis.get(key)
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else str(value)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)


@dataclass(frozen=True, slots=True)
class _Entry:
    value: str
    expires_at: int  # epoch ms


class MemorySessionStore(SessionStore):
    """In-process store for development and tests.

    Entries past their TTL read as absent. Expired entries are dropped when
    read and swept on every write, so the dict only holds live sessions plus
    whatever expired since the last write.
    """

    def __init__(self, clock: Callable[[], int] = now_ms) -> None:
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        now = self._clock()
        self._sweep(now)
        self._entries[key] = _Entry(value=value, expires_at=now + ttl_seconds * 1000)

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def _sweep(self, now: int) -> None:
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)
