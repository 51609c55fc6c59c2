from redislock.domain.exceptions import (
    AlreadyHeldError,
    LockAcquisitionError,
    LockConfigurationError,
    LockError,
    LockReleaseError,
)
from redislock.domain.models import LockOptions, LockState

__all__ = [
    "AlreadyHeldError",
    "LockAcquisitionError",
    "LockConfigurationError",
    "LockError",
    "LockOptions",
    "LockReleaseError",
    "LockState",
]
