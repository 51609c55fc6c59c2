"""Fixtures for API unit tests: isolated lock registry, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from redislock.main import app


@pytest.fixture
def app_with_overrides(registry):
    """App with the lock registry overridden for testing."""
    from redislock.api import dependencies

    app.dependency_overrides[dependencies.get_registry] = lambda: registry
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
