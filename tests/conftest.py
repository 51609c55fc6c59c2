"""Shared fixtures: in-memory Redis honoring NX/PX and the delifequal script, fresh lock registry."""

import time

import pytest

from redislock.locking.registry import LockRegistry


class FakeScript:
    """Stands in for redis.asyncio AsyncScript; only compare-and-delete semantics are needed."""

    def __init__(self, redis: "FakeRedis", source: str) -> None:
        self._redis = redis
        self.source = source
        self.calls = 0

    async def __call__(self, keys=None, args=None, client=None):
        self.calls += 1
        key, token = keys[0], args[0]
        if await self._redis.get(key) == token:
            await self._redis.delete(key)
            return 1
        return 0


class FakeRedis:
    """In-memory Redis for unit tests. TTLs are tracked with time.monotonic."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self._expires_at: dict[str, float] = {}
        self.set_calls = 0
        self.register_script_calls = 0

    def _purge(self, key: str) -> None:
        expires_at = self._expires_at.get(key)
        if expires_at is not None and time.monotonic() >= expires_at:
            self._store.pop(key, None)
            self._expires_at.pop(key, None)

    async def set(self, key: str, value: str, px: int | None = None, nx: bool = False):
        self.set_calls += 1
        self._purge(key)
        if nx and key in self._store:
            return None
        self._store[key] = value
        if px is not None:
            self._expires_at[key] = time.monotonic() + px / 1000
        else:
            self._expires_at.pop(key, None)
        return True

    async def get(self, key: str):
        self._purge(key)
        return self._store.get(key)

    async def delete(self, key: str) -> int:
        self._purge(key)
        self._expires_at.pop(key, None)
        return 1 if self._store.pop(key, None) is not None else 0

    def register_script(self, source: str) -> FakeScript:
        self.register_script_calls += 1
        return FakeScript(self, source)

    def expire(self, key: str) -> None:
        """Drop key as if its lease ran out."""
        self._store.pop(key, None)
        self._expires_at.pop(key, None)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def registry():
    return LockRegistry()
