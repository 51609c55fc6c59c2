# redislock/main.py

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from redislock.api.middleware import CorrelationIdMiddleware
from redislock.api.routers import health, locks
from redislock.config.logging import configure_logging
from redislock.config.settings import get_settings

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
)

app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /locks
app.include_router(health.router)
app.include_router(locks.router, prefix="/locks")
