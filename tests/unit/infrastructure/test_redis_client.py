"""RedisStoreAdapter: async and blocking clients behave the same; create_redis wiring."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from redislock.infrastructure.cache.redis_client import RedisStoreAdapter, create_redis
from redislock.infrastructure.cache.scripts import DEL_IF_EQUAL, DEL_IF_EQUAL_NAME


class BlockingRedis:
    """Mimics the blocking redis.Redis surface: plain return values."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def set(self, key, value, px=None, nx=False):
        if nx and key in self._store:
            return None
        self._store[key] = value
        return True

    def register_script(self, source):
        def run(keys=None, args=None, client=None):
            if self._store.get(keys[0]) == args[0]:
                del self._store[keys[0]]
                return 1
            return 0

        return run


@pytest.mark.asyncio
async def test_set_if_absent_async_client():
    conn = MagicMock()
    conn.set = AsyncMock(side_effect=[True, None])
    adapter = RedisStoreAdapter(conn)

    assert await adapter.set_if_absent("k", "v", 100) is True
    assert await adapter.set_if_absent("k", "v", 100) is False
    conn.set.assert_awaited_with("k", "v", px=100, nx=True)


@pytest.mark.asyncio
async def test_blocking_client_is_awaitable_too():
    adapter = RedisStoreAdapter(BlockingRedis())
    adapter.register_script(DEL_IF_EQUAL_NAME, DEL_IF_EQUAL)

    assert await adapter.set_if_absent("k", "tok", 100) is True
    assert await adapter.set_if_absent("k", "other", 100) is False
    assert await adapter.run_script(DEL_IF_EQUAL_NAME, ["k"], ["other"]) == 0
    assert await adapter.run_script(DEL_IF_EQUAL_NAME, ["k"], ["tok"]) == 1


@pytest.mark.asyncio
async def test_run_script_forwards_keys_and_args():
    conn = MagicMock()
    script = AsyncMock(return_value=1)
    conn.register_script.return_value = script
    adapter = RedisStoreAdapter(conn)
    adapter.register_script("delifequal", DEL_IF_EQUAL)

    assert adapter.has_script("delifequal")
    assert await adapter.run_script("delifequal", ("k",), ("tok",)) == 1
    script.assert_awaited_once_with(keys=["k"], args=["tok"])
    conn.register_script.assert_called_once_with(DEL_IF_EQUAL)


@pytest.mark.asyncio
async def test_run_unknown_script_raises():
    adapter = RedisStoreAdapter(MagicMock())
    with pytest.raises(KeyError):
        await adapter.run_script("missing", ["k"], ["v"])


@pytest.mark.asyncio
async def test_create_redis_decodes_responses_without_connecting():
    client = create_redis("redis://localhost:6399/2")
    try:
        assert isinstance(client, redis.Redis)
        kwargs = client.connection_pool.connection_kwargs
        assert kwargs["decode_responses"] is True
        assert kwargs["port"] == 6399
        assert kwargs["db"] == 2
    finally:
        await client.aclose()
