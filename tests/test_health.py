"""Tests for health check endpoint."""

import pytest
from httpx import AsyncClient


class TestHealthCheck:
    """Tests for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_response_structure(self, client: AsyncClient):
        """Test health response has correct structure."""
        response = await client.get("/health")
        data = response.json()

        assert "status" in data
        assert "timestamp" in data
        assert "uptime_seconds" in data
        assert "version" in data
        assert "checks" in data

    @pytest.mark.asyncio
    async def test_healthy_without_cache(self, client: AsyncClient):
        """Redis is disabled in tests, so the service is healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["redis"] == {"status": "disabled"}

    @pytest.mark.asyncio
    async def test_reports_missing_tmdb_key(self, client: AsyncClient):
        """Test reports missing tmdb key."""
        response = await client.get("/health")
        assert response.json()["checks"]["tmdb"] == {"status": "missing_api_key"}
