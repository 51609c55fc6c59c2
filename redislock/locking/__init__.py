"""Locking layer: Lock handle and its registries. No FastAPI."""

from redislock.locking.lock import Lock
from redislock.locking.registry import (
    ConnectionRegistry,
    LockRegistry,
    ScriptHandle,
    ScriptRegistry,
    get_registry,
)

__all__ = [
    "ConnectionRegistry",
    "Lock",
    "LockRegistry",
    "ScriptHandle",
    "ScriptRegistry",
    "get_registry",
]
