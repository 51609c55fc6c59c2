# redislock/config/settings.py

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LockSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="REDISLOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "redislock"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"

    # --- Redis ---
    redis_url: str = "redis://localhost:6379/0"

    # --- Lock defaults (milliseconds) ---
    lock_timeout_ms: int = Field(default=10000, gt=0)
    lock_retries: int = Field(default=0, ge=0)
    lock_delay_ms: int = Field(default=100, ge=0)

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> LockSettings:
    return LockSettings()
