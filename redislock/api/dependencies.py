"""FastAPI dependency injection: lock registry, correlation_id."""

from fastapi import Request

from redislock.locking.registry import LockRegistry
from redislock.locking.registry import get_registry as _default_registry


def get_registry() -> LockRegistry:
    """Return the process-wide lock registry."""
    return _default_registry()


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""
