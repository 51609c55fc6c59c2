# redislock/infrastructure/cache/redis_client.py

import inspect
from typing import Any, Sequence

import redis.asyncio as redis


def create_redis(url: str) -> redis.Redis:
    """Build an asyncio Redis connection that returns str values."""
    return redis.from_url(url, decode_responses=True)


async def _resolve(result: Any) -> Any:
    # redis.asyncio returns coroutines, the blocking client returns values.
    if inspect.isawaitable(result):
        return await result
    return result


class RedisStoreAdapter:
    """
    Per-connection wrapper exposing the operations a Lock needs as awaitables.
    Accepts redis.asyncio.Redis or the blocking redis.Redis.
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection
        self._scripts: dict[str, Any] = {}

    @property
    def connection(self) -> Any:
        return self._connection

    async def set_if_absent(self, key: str, value: str, ttl_ms: int) -> bool:
        """SET key value PX ttl_ms NX. Returns True if the key was set."""
        return bool(
            await _resolve(self._connection.set(key, value, px=ttl_ms, nx=True))
        )

    def register_script(self, name: str, source: str) -> None:
        """
        Register Lua source under name. No I/O: redis-py hashes the source and
        loads it on the first EVALSHA miss.
        """
        self._scripts[name] = self._connection.register_script(source)

    def has_script(self, name: str) -> bool:
        return name in self._scripts

    async def run_script(self, name: str, keys: Sequence[str], args: Sequence[Any]) -> Any:
        """Invoke a registered script. Returns the script's raw result."""
        script = self._scripts.get(name)
        if script is None:
            raise KeyError(f"Script {name!r} is not registered")
        return await _resolve(script(keys=list(keys), args=list(args)))
