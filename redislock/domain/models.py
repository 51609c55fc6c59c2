"""Lock state and options. Pure values, no Redis."""

from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from redislock.domain.exceptions import LockConfigurationError

DEFAULT_TIMEOUT_MS = 10000
DEFAULT_RETRIES = 0
DEFAULT_DELAY_MS = 100


class LockState(str, Enum):
    """
    Lifecycle of a Lock.

    IDLE -> ACQUIRING -> LOCKED | IDLE
    LOCKED -> RELEASING -> IDLE | LOCKED (transport failure)
    """

    IDLE = "idle"
    ACQUIRING = "acquiring"
    LOCKED = "locked"
    RELEASING = "releasing"


class LockOptions(BaseModel):
    """Recognized lock options. Unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)  # lease, ms
    retries: int = Field(default=DEFAULT_RETRIES, ge=0)
    delay: int = Field(default=DEFAULT_DELAY_MS, ge=0)  # between attempts, ms

    def merged(self, options: Union["LockOptions", Mapping[str, Any], None] = None, **overrides: Any) -> "LockOptions":
        """Return a copy with recognized keys from options, then overrides, applied on top. Non-mapping options are ignored."""
        data = self.model_dump()
        if isinstance(options, LockOptions):
            data.update(options.model_dump())
        elif isinstance(options, Mapping):
            data.update({k: v for k, v in options.items() if k in LockOptions.model_fields})
        data.update({k: v for k, v in overrides.items() if k in LockOptions.model_fields})
        return build_options(data)


def build_options(data: Optional[Mapping[str, Any]] = None) -> LockOptions:
    """Validate a mapping into LockOptions, raising LockConfigurationError on bad values."""
    try:
        return LockOptions.model_validate(dict(data or {}))
    except ValidationError as exc:
        raise LockConfigurationError(f"Invalid lock options: {exc}") from exc
