"""Per-connection adapters, per-connection scripts and the acquired-locks table. Injected into Locks."""

import threading
from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from redislock.config.settings import LockSettings, get_settings
from redislock.domain.models import LockOptions, build_options
from redislock.infrastructure.cache.redis_client import RedisStoreAdapter
from redislock.infrastructure.cache.scripts import DEL_IF_EQUAL, DEL_IF_EQUAL_NAME

if TYPE_CHECKING:
    from redislock.locking.lock import Lock


def connection_identity(connection: Any) -> int:
    """Identity of the underlying connection; an adapter maps to the connection it wraps."""
    if isinstance(connection, RedisStoreAdapter):
        connection = connection.connection
    return id(connection)


class ConnectionRegistry:
    """
    Connection identity -> RedisStoreAdapter. Append-only; each entry holds its
    connection, so an identity is never recycled while the registry lives.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._adapters: dict[int, RedisStoreAdapter] = {}

    def adapter_for(self, connection: Any) -> RedisStoreAdapter:
        identity = connection_identity(connection)
        with self._lock:
            adapter = self._adapters.get(identity)
            if adapter is None:
                if isinstance(connection, RedisStoreAdapter):
                    adapter = connection
                else:
                    adapter = RedisStoreAdapter(connection)
                self._adapters[identity] = adapter
            return adapter

    def __len__(self) -> int:
        return len(self._adapters)


class ScriptHandle:
    """A script registered on one adapter, invoked by name."""

    def __init__(self, adapter: RedisStoreAdapter, name: str) -> None:
        self.adapter = adapter
        self.name = name

    async def __call__(self, keys: Sequence[str], args: Sequence[Any]) -> Any:
        return await self.adapter.run_script(self.name, keys, args)


class ScriptRegistry:
    """(connection identity, script name) -> ScriptHandle. Registers each script once per connection."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handles: dict[tuple[int, str], ScriptHandle] = {}

    def script_for(self, adapter: RedisStoreAdapter, name: str, source: str) -> ScriptHandle:
        identity = (connection_identity(adapter), name)
        with self._lock:
            handle = self._handles.get(identity)
            if handle is None:
                if not adapter.has_script(name):
                    adapter.register_script(name, source)
                handle = ScriptHandle(adapter, name)
                self._handles[identity] = handle
            return handle

    def __len__(self) -> int:
        return len(self._handles)


class LockRegistry:
    """
    Composition root for Locks: option defaults, both registries and the table of
    currently acquired locks (keyed by lock id). The table is read-only to callers;
    only Lock.acquire/release change it.
    """

    def __init__(
        self,
        defaults: Optional[LockOptions] = None,
        connections: Optional[ConnectionRegistry] = None,
        scripts: Optional[ScriptRegistry] = None,
    ) -> None:
        self._defaults = defaults or LockOptions()
        self.connections = connections or ConnectionRegistry()
        self.scripts = scripts or ScriptRegistry()
        self._acquired: dict[str, "Lock"] = {}
        self._acquired_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: LockSettings) -> "LockRegistry":
        return cls(
            defaults=build_options(
                {
                    "timeout": settings.lock_timeout_ms,
                    "retries": settings.lock_retries,
                    "delay": settings.lock_delay_ms,
                }
            )
        )

    @property
    def defaults(self) -> LockOptions:
        return self._defaults

    def set_defaults(self, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> LockOptions:
        """Replace defaults for Locks created afterwards. Existing Locks keep their options."""
        self._defaults = self._defaults.merged(options, **overrides)
        return self._defaults

    def adapter_for(self, connection: Any) -> RedisStoreAdapter:
        return self.connections.adapter_for(connection)

    def release_script_for(self, connection: Any) -> ScriptHandle:
        return self.scripts.script_for(self.adapter_for(connection), DEL_IF_EQUAL_NAME, DEL_IF_EQUAL)

    @property
    def acquired_locks(self) -> Mapping[str, "Lock"]:
        with self._acquired_lock:
            return MappingProxyType(dict(self._acquired))

    def mark_acquired(self, lock: "Lock") -> None:
        with self._acquired_lock:
            self._acquired[lock.id] = lock

    def mark_released(self, lock: "Lock") -> None:
        with self._acquired_lock:
            self._acquired.pop(lock.id, None)


@lru_cache
def get_registry() -> LockRegistry:
    """Process-wide default registry, seeded from settings."""
    return LockRegistry.from_settings(get_settings())
