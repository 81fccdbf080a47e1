"""TMDB API integration for content discovery."""

from typing import Any

import httpx
from pydantic import ValidationError

from src.config import get_settings
from src.constants import (
    CACHE_TTL_DISCOVER,
    CACHE_TTL_SIMILAR,
    DEFAULT_MIN_RATING,
    SORT_BY_RATING,
    TMDB_API_BASE_URL,
    TOP_RATED_MIN_VOTE_COUNT,
)
from src.models.schemas import Content, MediaType, YearRange
from src.utils.cache import cached
from src.utils.http_client import get_tmdb_client
from src.utils.logging import get_logger

logger = get_logger(__name__)


class TMDBError(Exception):
    """TMDB answered with an error status or an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TMDBService:
    """Service for discovering movies and TV shows on TMDB.

    Paginated list endpoints return ``Content`` items tagged with the media
    type that was queried (TMDB omits it on discover/similar results).
    """

    def __init__(
        self,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        language: str | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = settings.tmdb_api_key if api_key is None else api_key
        self.language = language or settings.tmdb_language
        self._client = client
        # Support both API key v3 and Bearer token
        if self.api_key.startswith("eyJ"):
            self.headers = {"Authorization": f"Bearer {self.api_key}"}
            self.use_api_key_param = False
        else:
            self.headers = {}
            self.use_api_key_param = True

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _add_api_key(self, params: dict[str, str]) -> dict[str, str]:
        """Add API key to params if using v3 key."""
        if self.use_api_key_param:
            params["api_key"] = self.api_key
        return params

    async def _get_results(self, path: str, params: dict[str, str]) -> list[dict[str, Any]]:
        """GET a paginated TMDB endpoint and return its raw `results` list."""
        client = self._client or get_tmdb_client()
        response = await client.get(
            f"{TMDB_API_BASE_URL}{path}",
            params=self._add_api_key(params),
            headers=self.headers,
        )

        if response.status_code != 200:
            raise TMDBError(f"TMDB {path} returned {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise TMDBError(f"TMDB {path} returned invalid JSON") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise TMDBError(f"TMDB {path} response has no results list")
        return results

    @staticmethod
    def _to_content(items: list[dict[str, Any]], media_type: MediaType) -> list[Content]:
        contents = []
        for item in items:
            try:
                contents.append(Content.model_validate({**item, "media_type": media_type}))
            except ValidationError:
                logger.debug(f"Skipping malformed TMDB {media_type} item: {item.get('id')}")
        return contents

    async def discover_by_genres(
        self,
        genre_ids: list[int],
        media_type: MediaType = "movie",
        min_rating: float = DEFAULT_MIN_RATING,
        min_vote_count: int = 100,
        page: int = 1,
        sort_by: str = SORT_BY_RATING,
        year_range: YearRange | None = None,
    ) -> list[Content]:
        """Discover movies or TV shows matching all of `genre_ids`.

        Args:
            genre_ids: TMDB genre ids (AND-combined)
            media_type: "movie" or "tv"
            min_rating: Minimum vote average
            min_vote_count: Minimum vote count
            page: TMDB page number (1-based)
            sort_by: TMDB sort order (vote_average.desc, popularity.desc, ...)
            year_range: Optional release (or first air) year window

        Raises:
            TMDBError: on a non-200 response or malformed payload
        """
        if not self.is_configured:
            logger.debug("TMDB API key not configured, skipping discovery")
            return []

        items = await self._fetch_discover(
            media_type,
            genre_ids=list(genre_ids),
            min_rating=min_rating,
            min_vote_count=min_vote_count,
            page=page,
            sort_by=sort_by,
            year_min=year_range.min if year_range else None,
            year_max=year_range.max if year_range else None,
            language=self.language,
        )
        return self._to_content(items, media_type)

    @cached("tmdb:discover", ttl=CACHE_TTL_DISCOVER)
    async def _fetch_discover(
        self,
        media_type: MediaType,
        genre_ids: list[int],
        min_rating: float,
        min_vote_count: int,
        page: int,
        sort_by: str,
        year_min: int | None = None,
        year_max: int | None = None,
        language: str = "en-US",
    ) -> list[dict[str, Any]]:
        params = {
            "language": language,
            "include_adult": "false",
            "with_genres": ",".join(str(g) for g in genre_ids),
            "vote_average.gte": str(min_rating),
            "vote_count.gte": str(min_vote_count),
            "sort_by": sort_by,
            "page": str(page),
        }
        date_field = "primary_release_date" if media_type == "movie" else "first_air_date"
        if year_min is not None:
            params[f"{date_field}.gte"] = f"{year_min}-01-01"
        if year_max is not None:
            params[f"{date_field}.lte"] = f"{year_max}-12-31"

        return await self._get_results(f"/discover/{media_type}", params)

    async def get_top_rated_by_genre(
        self,
        genre_id: int,
        media_type: MediaType = "movie",
        page: int = 1,
    ) -> list[Content]:
        """Best-rated titles of one genre with a solid vote count."""
        if not self.is_configured:
            return []

        items = await self._fetch_discover(
            media_type,
            genre_ids=[genre_id],
            min_rating=0,
            min_vote_count=TOP_RATED_MIN_VOTE_COUNT,
            page=page,
            sort_by=SORT_BY_RATING,
            language=self.language,
        )
        return self._to_content(items, media_type)

    async def get_similar(
        self,
        content_id: int,
        media_type: MediaType = "movie",
        page: int = 1,
    ) -> list[Content]:
        """TMDB "similar" titles for one movie or show."""
        if not self.is_configured:
            return []

        items = await self._fetch_similar(content_id, media_type, page, language=self.language)
        return self._to_content(items, media_type)

    @cached("tmdb:similar", ttl=CACHE_TTL_SIMILAR)
    async def _fetch_similar(
        self,
        content_id: int,
        media_type: MediaType,
        page: int,
        language: str = "en-US",
    ) -> list[dict[str, Any]]:
        params = {"language": language, "page": str(page)}
        return await self._get_results(f"/{media_type}/{content_id}/similar", params)


# Singleton instance
tmdb_service = TMDBService()
