"""Read-only view of locks currently acquired in this process."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from redislock.api.dependencies import get_registry
from redislock.api.schemas import LockView
from redislock.locking.registry import LockRegistry

router = APIRouter()


@router.get("", response_model=list[LockView])
async def list_locks(registry: Annotated[LockRegistry, Depends(get_registry)]) -> list[LockView]:
    """List acquired locks, ordered by key."""
    locks = sorted(registry.acquired_locks.values(), key=lambda lock: lock.key or "")
    return [LockView.from_lock(lock) for lock in locks]


@router.get("/{lock_id}", response_model=LockView)
async def get_lock(
    lock_id: str,
    registry: Annotated[LockRegistry, Depends(get_registry)],
) -> LockView:
    """Return one acquired lock by id. 404 if not held by this process."""
    lock = registry.acquired_locks.get(lock_id)
    if lock is None:
        raise HTTPException(status_code=404, detail="Lock not found")
    return LockView.from_lock(lock)
