# redislock/api/routers/health.py

from typing import Annotated

from fastapi import APIRouter, Depends

from redislock.api.dependencies import get_correlation_id
from redislock.config.settings import get_settings

router = APIRouter()


@router.get("/health")
async def health(correlation_id: Annotated[str, Depends(get_correlation_id)]):
    """Health check with correlation ID from request state."""
    settings = get_settings()
    return {
        "status": "ok",
        "correlation_id": correlation_id,
        "environment": settings.environment,
        "version": settings.version,
    }
