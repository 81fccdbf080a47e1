"""Tests for genre catalog API endpoints."""

import pytest
from httpx import AsyncClient


class TestListGenres:
    @pytest.mark.asyncio
    async def test_lists_all(self, client: AsyncClient):
        """Test listing every unified genre."""
        response = await client.get("/api/genres")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 23
        assert data[0] == {
            "id": "action",
            "name": "Action",
            "movie_ids": [28],
            "tv_ids": [10759],
            "child_safe": True,
        }

    @pytest.mark.asyncio
    async def test_child_safe_filter(self, client: AsyncClient):
        """Test child safe filter."""
        response = await client.get("/api/genres", params={"child_safe": "true", "media_type": "tv"})

        ids = {genre["id"] for genre in response.json()}
        assert len(ids) == 16
        assert "horror" not in ids
        assert "kids" in ids

    @pytest.mark.asyncio
    async def test_invalid_media_type(self, client: AsyncClient):
        """Test invalid media type."""
        response = await client.get("/api/genres", params={"media_type": "book"})
        assert response.status_code == 422


class TestGetGenre:
    @pytest.mark.asyncio
    async def test_found(self, client: AsyncClient):
        """Test getting a single genre."""
        response = await client.get("/api/genres/scifi")
        assert response.status_code == 200
        assert response.json()["name"] == "Science Fiction"

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient):
        """Test getting a non-existent genre."""
        response = await client.get("/api/genres/opera")
        assert response.status_code == 404
