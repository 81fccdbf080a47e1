"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock

# Settings are cached on first use; configure the test environment before
# anything from src is imported.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("TMDB_API_KEY", "")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.recommendations import get_engine
from src.main import app
from src.models.schemas import Content
from src.services.metadata.tmdb import TMDBService
from src.services.recommendations import RecommendationEngine


def make_content(content_id: int, **fields: Any) -> Content:
    """Build a Content item with sensible defaults."""
    fields.setdefault("media_type", "movie")
    fields.setdefault("genre_ids", [])
    return Content(id=content_id, **fields)


@pytest.fixture
def fake_tmdb() -> AsyncMock:
    """TMDB service double; every list endpoint returns [] unless overridden."""
    tmdb = AsyncMock(spec=TMDBService)
    tmdb.discover_by_genres.return_value = []
    tmdb.get_top_rated_by_genre.return_value = []
    tmdb.get_similar.return_value = []
    return tmdb


@pytest_asyncio.fixture
async def client(fake_tmdb: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """Create an unauthenticated test client."""
    app.dependency_overrides[get_engine] = lambda: RecommendationEngine(fake_tmdb)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def authenticated_client(fake_tmdb: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client that sends a forwarded user id."""
    app.dependency_overrides[get_engine] = lambda: RecommendationEngine(fake_tmdb)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-User-Id": "user-1"},
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
