# tests/conftest.py

"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
from glickoladder.config import RatingSettings, get_settings
from glickoladder.main import app
from httpx import ASGITransport, AsyncClient

# A fixed reference time so decay calculations are reproducible
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings() -> RatingSettings:
    """Default rating settings, independent of the environment."""
    return RatingSettings()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
async def async_client(
    settings: RatingSettings,
) -> AsyncGenerator[AsyncClient, None]:
    """Fixture to provide an async test client for the API."""

    # Override the settings dependency so tests ignore GLICKOLADDER_* variables
    app.dependency_overrides[get_settings] = lambda: settings

    transport = ASGITransport(app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Clean up the override after the test
    app.dependency_overrides.pop(get_settings, None)
