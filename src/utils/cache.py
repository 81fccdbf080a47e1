"""Redis caching for TMDB responses.

Async Redis cache with JSON serialization and namespaced keys. The cache is
best-effort: when Redis is unreachable every lookup is a miss and writes are
dropped, so callers never see cache errors.
"""

import hashlib
import json
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import redis.asyncio as redis

from src.config import get_settings
from src.utils.logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_TTL_SECONDS = 60 * 60


class RedisCache:
    """Async Redis cache client with JSON serialization."""

    def __init__(self, url: str | None = None) -> None:
        self._url = url
        self._client: redis.Redis | None = None
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            url = self._url or str(get_settings().redis_url)
            self._client = redis.from_url(url, encoding="utf-8", decode_responses=True)
        return self._client

    async def connect(self) -> bool:
        """Test the Redis connection and enable the cache if it answers."""
        try:
            await self._get_client().ping()
            self._connected = True
        except (redis.RedisError, OSError) as e:
            logger.warning(f"Redis cache unavailable: {e}")
            self._connected = False
        return self._connected

    async def ping(self) -> bool:
        """Ping Redis; raises if the server is unreachable."""
        return await self._get_client().ping()

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._connected = False

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or None on miss or error."""
        if not self._connected:
            return None

        try:
            data = await self._get_client().get(key)
        except redis.RedisError as e:
            logger.debug(f"Cache get error for {key}: {e}")
            return None
        return json.loads(data) if data else None

    async def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL_SECONDS) -> bool:
        """Store a JSON-serializable value for `ttl` seconds."""
        if not self._connected:
            return False

        try:
            await self._get_client().setex(key, ttl, json.dumps(value, default=str))
        except redis.RedisError as e:
            logger.debug(f"Cache set error for {key}: {e}")
            return False
        return True


cache = RedisCache()


def make_cache_key(namespace: str, *args: Any, **kwargs: Any) -> str:
    """Build a cache key from call arguments.

    Lists are joined with commas so ``[28, 12]`` and ``(28, 12)`` share a key.
    Keys longer than 200 characters are replaced by a short hash.
    """
    parts = [namespace]

    for arg in args:
        if arg is not None:
            parts.append(_key_part(arg))

    for key, value in sorted(kwargs.items()):
        if value is not None:
            parts.append(f"{key}={_key_part(value)}")

    key_str = ":".join(parts)
    if len(key_str) > 200:
        digest = hashlib.md5(key_str.encode()).hexdigest()[:12]
        key_str = f"{namespace}:{digest}"
    return key_str


def _key_part(value: Any) -> str:
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(v) for v in value)
    return str(value)


def cached(namespace: str, ttl: int = DEFAULT_TTL_SECONDS) -> Callable[[F], F]:
    """Cache the result of an async method in Redis.

    The first positional argument (``self``) is left out of the key. Results
    that are None or empty are not cached.

    Example:
        @cached("tmdb:discover", ttl=CACHE_TTL_DISCOVER)
        async def discover_by_genres(self, genre_ids, media_type="movie"):
            ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            cache_key = make_cache_key(namespace, *args[1:], **kwargs)

            cached_value = await cache.get(cache_key)
            if cached_value is not None:
                logger.debug(f"Cache HIT: {cache_key}")
                return cached_value

            logger.debug(f"Cache MISS: {cache_key}")
            result = await func(*args, **kwargs)
            if result:
                await cache.set(cache_key, result, ttl)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
