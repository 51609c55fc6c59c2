"""Pydantic response schemas for the diagnostics API."""

from typing import Optional

from pydantic import BaseModel, Field

from redislock.domain.models import LockState
from redislock.locking.lock import Lock


class LockView(BaseModel):
    """Read-only snapshot of an acquired Lock."""

    id: str
    key: Optional[str] = None
    state: LockState
    timeout: int = Field(..., description="Lease duration in milliseconds")
    retries: int
    delay: int = Field(..., description="Wait between attempts in milliseconds")

    @classmethod
    def from_lock(cls, lock: Lock) -> "LockView":
        return cls(
            id=lock.id,
            key=lock.key,
            state=lock.state,
            timeout=lock.timeout,
            retries=lock.retries,
            delay=lock.delay,
        )
