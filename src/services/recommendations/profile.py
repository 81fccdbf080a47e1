"""Recommendation profile built from a user's signals."""

from collections.abc import Iterable
from datetime import UTC, datetime
from statistics import fmean

from src.constants import TOP_GENRES_COUNT
from src.models.schemas import Content, RecommendationProfile, UserCollections, UserSignals, YearRange
from src.services.recommendations.genres import DEFAULT_CATALOG, GenreCatalog
from src.services.recommendations.signals import calculate_genre_preferences
from src.services.recommendations.years import detect_collection_year_preferences, extract_year
from src.utils.logging import get_logger

logger = get_logger(__name__)


def preferred_rating(liked: Iterable[Content]) -> float | None:
    """Mean TMDB vote average of liked items that have one."""
    ratings = [item.vote_average for item in liked if item.vote_average is not None]
    return fmean(ratings) if ratings else None


def preferred_year_range(collections: UserCollections) -> YearRange | None:
    """Oldest and newest year across liked, watchlist and collection items."""
    years = [
        year
        for item in (*collections.liked, *collections.watchlist, *collections.collection_items)
        if (year := extract_year(item)) is not None
    ]
    if not years:
        return None
    return YearRange(min=min(years), max=max(years))


def build_profile(
    user_id: str,
    signals: UserSignals,
    catalog: GenreCatalog = DEFAULT_CATALOG,
    now: datetime | None = None,
) -> RecommendationProfile:
    """Build a fresh profile; no network calls, nothing stored."""
    genres = calculate_genre_preferences(signals, catalog)

    profile = RecommendationProfile(
        user_id=user_id,
        top_genres=genres[:TOP_GENRES_COUNT],
        preferred_rating=preferred_rating(signals.liked),
        preferred_year_range=preferred_year_range(signals),
        genre_year_preferences=detect_collection_year_preferences(signals, catalog),
        updated_at=now or datetime.now(UTC),
    )

    logger.info(
        f"User {user_id} top genres: "
        f"{[(g.genre_name, g.score) for g in profile.top_genres]}"
    )
    return profile


def get_seen_content_ids(collections: UserCollections) -> list[int]:
    """Ids the user already knows about, hidden items included."""
    seen: dict[int, None] = {}
    for item in (
        *collections.liked,
        *collections.watchlist,
        *collections.collection_items,
        *collections.hidden,
    ):
        seen[item.id] = None
    return list(seen)


def has_enough_data(collections: UserCollections, min_items: int = 1) -> bool:
    """True when liked, watchlist and collection items reach `min_items`."""
    total = len(collections.liked) + len(collections.watchlist) + len(collections.collection_items)
    return total >= min_items
