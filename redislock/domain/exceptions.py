"""Lock errors. Transport errors from the Redis client are never wrapped in these."""

from typing import Optional


class LockError(Exception):
    """Base for all lock errors."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        self.message = message
        self.key = key
        super().__init__(message)


class LockConfigurationError(LockError):
    """Raised when lock options or defaults hold invalid values."""


class LockAcquisitionError(LockError):
    """Raised when the conditional write never succeeded within the retry budget."""


class AlreadyHeldError(LockAcquisitionError):
    """Raised by acquire() on a Lock that is already locked. No I/O is attempted."""


class LockReleaseError(LockError):
    """
    Raised by release() on a Lock that is not locked, or when the stored token no
    longer matches (the lease expired or the key was reclaimed). In the latter
    case the Lock's local state has already been cleared.
    """
