"""Tests for recommendations API endpoints."""

import pytest
from conftest import make_content
from httpx import AsyncClient


def content_json(content_id: int, **fields) -> dict:
    return make_content(content_id, **fields).model_dump(mode="json")


class TestAuthentication:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("post", "/api/recommendations/personalized"),
            ("post", "/api/recommendations/genre-based"),
            ("post", "/api/recommendations/year-preferences"),
            ("get", "/api/recommendations/genre/28"),
        ],
    )
    async def test_requires_user(self, client: AsyncClient, method: str, path: str):
        """Test that requests without a user id are rejected."""
        kwargs = {"json": {}} if method == "post" else {}
        response = await client.request(method.upper(), path, **kwargs)
        assert response.status_code == 401


class TestPersonalized:
    @pytest.mark.asyncio
    async def test_empty_request_requires_data(self, authenticated_client: AsyncClient):
        """Test empty request requires data."""
        response = await authenticated_client.post("/api/recommendations/personalized", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["requires_data"] is True
        assert data["recommendations"] == []

    @pytest.mark.asyncio
    async def test_returns_recommendations(self, authenticated_client: AsyncClient, fake_tmdb):
        """Test personalized recommendations for a user with likes."""
        fake_tmdb.discover_by_genres.return_value = [make_content(50, title="Ronin")]
        body = {"liked": [content_json(1, genre_ids=[28])], "limit": 5}

        response = await authenticated_client.post("/api/recommendations/personalized", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["requires_data"] is False
        assert data["recommendations"][0]["content"]["id"] == 50
        assert data["recommendations"][0]["source"] == "genre_based"
        assert data["profile"]["top_genres"][0]["genre_id"] == 28

    @pytest.mark.asyncio
    async def test_invalid_limit(self, authenticated_client: AsyncClient):
        """Test a zero limit is rejected."""
        response = await authenticated_client.post(
            "/api/recommendations/personalized", json={"limit": 0}
        )
        assert response.status_code == 422


class TestGenreBased:
    @pytest.mark.asyncio
    async def test_page_query(self, authenticated_client: AsyncClient, fake_tmdb):
        """Test the page query drives TMDB paging and sort."""
        fake_tmdb.discover_by_genres.return_value = [make_content(1), make_content(9)]
        body = {"liked": [content_json(1, genre_ids=[28])]}

        response = await authenticated_client.post(
            "/api/recommendations/genre-based?page=2&limit=10", json=body
        )

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [9, 9]
        call = fake_tmdb.discover_by_genres.await_args_list[0]
        assert call.kwargs["page"] == 2
        assert call.kwargs["sort_by"] == "popularity.desc"

    @pytest.mark.asyncio
    async def test_limit_above_cap_rejected(self, authenticated_client: AsyncClient):
        """Test limit above cap rejected."""
        response = await authenticated_client.post(
            "/api/recommendations/genre-based?limit=51", json={}
        )
        assert response.status_code == 422


class TestYearPreferences:
    @pytest.mark.asyncio
    async def test_detects_horror_decade(self, authenticated_client: AsyncClient):
        """Test detecting a preferred horror decade."""
        liked = [content_json(i, genre_ids=[27], release_date=f"198{i}-10-31") for i in range(4)]

        response = await authenticated_client.post(
            "/api/recommendations/year-preferences", json={"liked": liked}
        )

        assert response.status_code == 200
        data = response.json()
        assert data[0]["genre_id"] == "horror"
        assert data[0]["preferred_decades"] == [1980]
        assert data[0]["sample_size"] == 4


class TestGenreRecommendations:
    @pytest.mark.asyncio
    async def test_excludes_ids(self, authenticated_client: AsyncClient, fake_tmdb):
        """Test genre recommendations drop excluded ids."""
        fake_tmdb.get_top_rated_by_genre.return_value = [make_content(i) for i in range(1, 6)]

        response = await authenticated_client.get(
            "/api/recommendations/genre/27?limit=2&exclude=1&exclude=2&media_type=tv"
        )

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [3, 4]
        fake_tmdb.get_top_rated_by_genre.assert_awaited_once_with(27, "tv", 1)


class TestUntaggedItems:
    @pytest.mark.asyncio
    async def test_null_genre_ids_skipped_in_year_preferences(self, authenticated_client: AsyncClient):
        """Test an item with null genre tags does not reject the request."""
        liked = [{"id": 1, "genre_ids": None, "release_date": "2001-01-01"}] + [
            content_json(i, genre_ids=[28], release_date=f"200{i}-06-01") for i in range(2, 6)
        ]

        response = await authenticated_client.post(
            "/api/recommendations/year-preferences", json={"liked": liked}
        )

        assert response.status_code == 200
        data = response.json()
        assert [pref["genre_id"] for pref in data] == ["action"]
        assert data[0]["sample_size"] == 4

    @pytest.mark.asyncio
    async def test_null_genre_ids_in_personalized(self, authenticated_client: AsyncClient):
        """Test personalized recommendations ignore items without genre tags."""
        body = {
            "liked": [
                {"id": 1, "genre_ids": None, "title": "Untagged"},
                content_json(2, genre_ids=[28]),
            ]
        }

        response = await authenticated_client.post("/api/recommendations/personalized", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["requires_data"] is False
        assert [g["genre_id"] for g in data["profile"]["top_genres"]] == [28]
