"""Genre-driven content discovery against TMDB."""

import asyncio
import math
from collections.abc import Awaitable, Iterable

from src.constants import (
    DEFAULT_MIN_RATING,
    DISCOVERY_MIN_VOTE_COUNT,
    FIRST_PAGE_GENRE_COUNT,
    GENRE_ROTATION_STEP,
    MAX_BATCH_SIMILAR_IDS,
    RATING_TOLERANCE,
    ROTATING_GENRE_COUNT,
    SORT_BY_POPULARITY,
    SORT_BY_RATING,
    TMDB_MEDIA_TYPE_MOVIE,
    TMDB_MEDIA_TYPE_TV,
    TMDB_PAGE_SIZE,
)
from src.models.schemas import (
    Content,
    GenrePreference,
    GenreYearPreference,
    MediaType,
    RecommendationProfile,
    YearRange,
)
from src.services.metadata.tmdb import TMDBService, tmdb_service
from src.services.recommendations.genres import DEFAULT_CATALOG, GenreCatalog
from src.utils.logging import LogContext, get_logger

logger = get_logger(__name__)

DISCOVERY_MEDIA_TYPES: tuple[MediaType, ...] = (TMDB_MEDIA_TYPE_MOVIE, TMDB_MEDIA_TYPE_TV)


def select_genres_for_page(genres: list[GenrePreference], page: int) -> list[GenrePreference]:
    """Rotating genre subset for one page of results.

    Page 1 uses the top 3 genres. Later pages use up to 5, starting two slots
    further along per page and wrapping around, so each page leads with
    different genres.
    """
    if not genres:
        return []

    if page <= 1:
        return genres[:FIRST_PAGE_GENRE_COUNT]

    count = min(ROTATING_GENRE_COUNT, len(genres))
    offset = ((page - 1) * GENRE_ROTATION_STEP) % len(genres)
    return [genres[(offset + i) % len(genres)] for i in range(count)]


def tmdb_pages_for(limit: int, page: int) -> list[int]:
    """TMDB page numbers backing one logical page of `limit` items."""
    pages_to_fetch = math.ceil(limit / TMDB_PAGE_SIZE)
    start = (page - 1) * pages_to_fetch + 1
    return list(range(start, start + pages_to_fetch))


def sort_for_page(page: int) -> str:
    """Odd pages sort by rating, even pages by popularity."""
    return SORT_BY_RATING if page % 2 == 1 else SORT_BY_POPULARITY


def min_rating_for(profile: RecommendationProfile) -> float:
    if profile.preferred_rating is None:
        return DEFAULT_MIN_RATING
    return profile.preferred_rating - RATING_TOLERANCE


def year_window_for(
    genres: Iterable[GenrePreference],
    year_preferences: list[GenreYearPreference],
    catalog: GenreCatalog = DEFAULT_CATALOG,
) -> YearRange | None:
    """Union of the effective year ranges behind the selected genres.

    A TMDB id is translated to unified ids through both the movie and TV
    mappings; the first of those with an effective range is used.
    """
    if not year_preferences:
        return None

    by_genre = {pref.genre_id: pref for pref in year_preferences}
    ranges: list[YearRange] = []
    for genre in genres:
        unified_ids = dict.fromkeys(
            catalog.convert_external_to_unified([genre.genre_id], "movie")
            + catalog.convert_external_to_unified([genre.genre_id], "tv")
        )
        for unified_id in unified_ids:
            pref = by_genre.get(unified_id)
            if pref is not None and pref.effective_year_range is not None:
                ranges.append(pref.effective_year_range)
                break

    if not ranges:
        return None
    return YearRange(min=min(r.min for r in ranges), max=max(r.max for r in ranges))


def _without_excluded(items: Iterable[Content], exclude_ids: Iterable[int]) -> list[Content]:
    excluded = set(exclude_ids)
    return [item for item in items if item.id not in excluded]


class DiscoveryPlanner:
    """Turns a recommendation profile into TMDB discovery queries.

    Requests of one batch run concurrently; a failed request is logged and
    dropped while its siblings' results are kept. Nothing here raises to the
    caller: on failure the result is an empty list.
    """

    def __init__(
        self,
        tmdb: TMDBService | None = None,
        catalog: GenreCatalog = DEFAULT_CATALOG,
    ) -> None:
        self.tmdb = tmdb or tmdb_service
        self.catalog = catalog

    async def _gather_settled(
        self, requests: list[Awaitable[list[Content]]], log: LogContext
    ) -> list[Content]:
        """Run requests concurrently and flatten the ones that succeeded."""
        results = await asyncio.gather(*requests, return_exceptions=True)

        combined: list[Content] = []
        failures = 0
        for result in results:
            if isinstance(result, Exception):
                failures += 1
                log.warning(f"Discovery request failed: {result!r}")
                continue
            combined.extend(result)

        if failures:
            log.warning(f"{failures}/{len(results)} discovery requests failed")
        return combined

    async def get_genre_based_recommendations(
        self,
        profile: RecommendationProfile,
        limit: int = 20,
        exclude_ids: Iterable[int] = (),
        page: int = 1,
    ) -> list[Content]:
        """One page of discovery results for the profile's top genres.

        Args:
            profile: User recommendation profile
            limit: Number of items to return at most
            exclude_ids: Content ids never to return (already seen, ...)
            page: Logical page number (1-based)

        Returns:
            Movies and shows matching the selected genres, or [] when the
            profile has no genres or every request failed
        """
        if not profile.top_genres or limit <= 0:
            return []

        page = max(page, 1)
        log = LogContext(logger, user=profile.user_id, page=page)

        try:
            genres = select_genres_for_page(profile.top_genres, page)
            genre_ids = [g.genre_id for g in genres]
            min_rating = min_rating_for(profile)
            sort_by = sort_for_page(page)
            year_range = year_window_for(genres, profile.genre_year_preferences, self.catalog)

            log.info(
                f"Discovery filters: genres={[g.genre_name for g in genres]} "
                f"min_rating={min_rating:.1f} sort={sort_by} "
                f"years={f'{year_range.min}-{year_range.max}' if year_range else 'none'}"
            )

            requests = [
                self.tmdb.discover_by_genres(
                    genre_ids,
                    media_type=media_type,
                    min_rating=min_rating,
                    min_vote_count=DISCOVERY_MIN_VOTE_COUNT,
                    page=tmdb_page,
                    sort_by=sort_by,
                    year_range=year_range,
                )
                for tmdb_page in tmdb_pages_for(limit, page)
                for media_type in DISCOVERY_MEDIA_TYPES
            ]
            combined = await self._gather_settled(requests, log)
        except Exception as e:
            log.error(f"Error generating genre-based recommendations: {e}", exc_info=True)
            return []

        return _without_excluded(combined, exclude_ids)[:limit]

    async def get_genre_recommendations(
        self,
        genre_id: int,
        limit: int = 20,
        exclude_ids: Iterable[int] = (),
        media_type: MediaType = "movie",
    ) -> list[Content]:
        """Top-rated titles of a single TMDB genre."""
        try:
            results = await self.tmdb.get_top_rated_by_genre(genre_id, media_type, 1)
        except Exception as e:
            logger.error(f"Error getting recommendations for genre {genre_id}: {e}")
            return []

        return _without_excluded(results, exclude_ids)[:limit]

    async def get_batch_similar_content(
        self,
        content_ids: list[int],
        media_type: MediaType = "movie",
        limit: int = 5,
    ) -> list[Content]:
        """Similar titles for up to five seeds, deduplicated, in seed order."""
        log = LogContext(logger, seeds=len(content_ids), media_type=media_type)
        requests = [
            self.tmdb.get_similar(content_id, media_type, 1)
            for content_id in content_ids[:MAX_BATCH_SIMILAR_IDS]
        ]
        try:
            combined = await self._gather_settled(requests, log)
        except Exception as e:
            log.error(f"Error batch fetching similar content: {e}")
            return []

        seen: set[int] = set()
        deduplicated: list[Content] = []
        for item in combined:
            if len(deduplicated) >= limit:
                break
            if item.id not in seen:
                seen.add(item.id)
                deduplicated.append(item)
        return deduplicated


async def get_genre_based_recommendations(
    profile: RecommendationProfile,
    limit: int = 20,
    exclude_ids: Iterable[int] = (),
    page: int = 1,
) -> list[Content]:
    """Discovery page using the shared TMDB service."""
    return await DiscoveryPlanner().get_genre_based_recommendations(profile, limit, exclude_ids, page)
