"""Utility modules for the recommendation service."""

from src.utils.cache import cache, cached, make_cache_key, RedisCache
from src.utils.http_client import close_all_clients, get_tmdb_client
from src.utils.logging import get_logger, LogContext, setup_logging

__all__ = [
    # Caching
    "cache",
    "cached",
    "make_cache_key",
    "RedisCache",
    # HTTP
    "close_all_clients",
    "get_tmdb_client",
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
]
