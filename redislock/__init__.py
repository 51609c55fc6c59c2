"""
Distributed mutual exclusion on a single Redis endpoint.

Public API surface for the redislock package.
"""

from redislock.domain.exceptions import (
    AlreadyHeldError,
    LockAcquisitionError,
    LockConfigurationError,
    LockError,
    LockReleaseError,
)
from redislock.domain.models import LockOptions, LockState
from redislock.locking.lock import Lock
from redislock.locking.registry import LockRegistry, get_registry

__all__ = [
    "AlreadyHeldError",
    "Lock",
    "LockAcquisitionError",
    "LockConfigurationError",
    "LockError",
    "LockOptions",
    "LockRegistry",
    "LockReleaseError",
    "LockState",
    "get_registry",
]

__version__ = "0.1.0"
