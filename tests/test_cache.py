"""Tests for cache helpers."""

import importlib
from unittest.mock import AsyncMock

import httpx
import pytest

from src.services.metadata.tmdb import TMDBService
from src.utils.cache import RedisCache, cache, cached, make_cache_key


@pytest.fixture
def redis_client(monkeypatch) -> AsyncMock:
    """Connected cache backed by an in-memory dict instead of Redis."""
    store: dict[str, str] = {}
    client = AsyncMock()
    client.get.side_effect = lambda key: store.get(key)
    client.setex.side_effect = lambda key, ttl, value: store.__setitem__(key, value)

    connected = RedisCache("redis://test")
    connected._client = client
    connected._connected = True
    monkeypatch.setattr(importlib.import_module("src.utils.cache"), "cache", connected)
    return client


class TestMakeCacheKey:
    def test_joins_args_and_sorted_kwargs(self):
        """Test keys list positional args then sorted kwargs, skipping None."""
        key = make_cache_key("tmdb:discover", "movie", page=2, genre_ids=[28, 12], year_min=None)
        assert key == "tmdb:discover:movie:genre_ids=28,12:page=2"

    def test_long_keys_are_hashed(self):
        """Test overlong keys are replaced by a short hash."""
        key = make_cache_key("ns", "x" * 300)
        assert key.startswith("ns:")
        assert len(key) < 20


class TestCachedDecorator:
    @pytest.mark.asyncio
    async def test_passthrough_when_disconnected(self):
        """Test every call reaches the wrapped function without Redis."""
        calls = []

        class Service:
            @cached("test:ns")
            async def fetch(self, value):
                calls.append(value)
                return [value]

        assert not cache.connected
        service = Service()
        assert await service.fetch(1) == [1]
        assert await service.fetch(1) == [1]
        assert calls == [1, 1]

    @pytest.mark.asyncio
    async def test_disconnected_cache_is_inert(self):
        """Test reads miss and writes are dropped when not connected."""
        local = RedisCache("redis://localhost:1/0")
        assert await local.get("k") is None
        assert await local.set("k", 1) is False

    @pytest.mark.asyncio
    async def test_hit_skips_wrapped_function(self, redis_client):
        """Test a second call is served from the cache."""
        calls = []

        class Service:
            @cached("test:ns", ttl=60)
            async def fetch(self, value):
                calls.append(value)
                return [{"id": value}]

        service = Service()
        assert await service.fetch(7) == [{"id": 7}]
        assert await service.fetch(7) == [{"id": 7}]

        assert calls == [7]
        redis_client.setex.assert_awaited_once()
        assert redis_client.setex.await_args.args[:2] == ("test:ns:7", 60)

    @pytest.mark.asyncio
    async def test_empty_results_not_stored(self, redis_client):
        """Test empty results are never written to the cache."""
        calls = []

        class Service:
            @cached("test:ns")
            async def fetch(self, value):
                calls.append(value)
                return []

        service = Service()
        await service.fetch(1)
        await service.fetch(1)

        assert calls == [1, 1]
        redis_client.setex.assert_not_called()


class TestCachedTMDB:
    @pytest.mark.asyncio
    async def test_discover_served_from_cache(self, redis_client):
        """Test a cached discover payload rebuilds the same content list."""
        requests: list[httpx.Request] = []

        def handler(request):
            requests.append(request)
            return httpx.Response(
                200,
                json={"results": [{"id": 1, "title": "Alien", "genre_ids": [27, 878], "vote_average": 8.1}]},
            )

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        tmdb = TMDBService(api_key="k", client=client, language="en-US")

        first = await tmdb.discover_by_genres([27], media_type="movie")
        second = await tmdb.discover_by_genres([27], media_type="movie")

        assert len(requests) == 1
        assert second == first
        assert second[0].genre_ids == [27, 878]
        assert second[0].media_type == "movie"

    @pytest.mark.asyncio
    async def test_empty_discover_not_cached(self, redis_client):
        """Test empty discover pages are fetched again next time."""
        requests: list[httpx.Request] = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"results": []})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        tmdb = TMDBService(api_key="k", client=client)

        assert await tmdb.discover_by_genres([27]) == []
        assert await tmdb.discover_by_genres([27]) == []

        assert len(requests) == 2
        redis_client.setex.assert_not_called()
