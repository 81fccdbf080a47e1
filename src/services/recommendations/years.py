"""Per-genre release-year preferences via decade clustering.

For every unified genre the user has content in, find the decades that hold
most of it and turn them into a year window discovery can filter on. Windows
are only produced once there is enough data (medium or high confidence).
"""

from collections import Counter, defaultdict
from collections.abc import Iterable
from datetime import date, datetime

from src.constants import (
    DECADE_COVERAGE_THRESHOLD,
    HIGH_CONFIDENCE_BUFFER,
    LOW_CONFIDENCE_MAX,
    MEDIUM_CONFIDENCE_BUFFER,
    MEDIUM_CONFIDENCE_MAX,
    MIN_ITEMS_PER_DECADE,
    YEAR_MAX_VALID,
    YEAR_MIN_VALID,
)
from src.models.schemas import Confidence, Content, GenreYearPreference, UserCollections, YearRange
from src.services.recommendations.genres import DEFAULT_CATALOG, GenreCatalog
from src.utils.logging import get_logger

logger = get_logger(__name__)


def _parse_year(value: str) -> int | None:
    value = value.strip()
    if len(value) == 4 and value.isdigit():
        return int(value)
    # Year-month, e.g. "2010-05"
    if len(value) == 7 and value[4] == "-" and value[:4].isdigit() and value[5:].isdigit():
        if not 1 <= int(value[5:]) <= 12:
            return None
        return int(value[:4])
    try:
        return date.fromisoformat(value).year
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).year
    except ValueError:
        return None


def extract_year(content: Content) -> int | None:
    """Release year of a movie or first-air year of a show.

    Returns None when the date is missing, unparseable or outside 1900-2050.
    """
    raw = content.release_date if content.media_type == "movie" else content.first_air_date
    if not raw:
        return None

    year = _parse_year(raw)
    if year is None or not YEAR_MIN_VALID <= year <= YEAR_MAX_VALID:
        return None
    return year


def confidence_for_sample_size(sample_size: int) -> Confidence:
    if sample_size <= LOW_CONFIDENCE_MAX:
        return "low"
    if sample_size <= MEDIUM_CONFIDENCE_MAX:
        return "medium"
    return "high"


def median_year(years: Iterable[int]) -> int:
    """Median of a non-empty list; even counts round the mean half up."""
    ordered = sorted(years)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid] + 1) // 2


def extract_preferred_decades(
    years: list[int],
    threshold: float = DECADE_COVERAGE_THRESHOLD,
    min_items_per_decade: int = MIN_ITEMS_PER_DECADE,
) -> list[int]:
    """Smallest set of busiest decades covering `threshold` of all years.

    Decades with fewer than `min_items_per_decade` entries are ignored, so
    the result can be empty or cover less than the threshold. Returned in
    chronological order.
    """
    if not years:
        return []

    decade_counts = Counter(year // 10 * 10 for year in years)
    ranked = [
        (decade, count)
        for decade, count in decade_counts.most_common()
        if count >= min_items_per_decade
    ]

    selected: list[int] = []
    covered = 0
    for decade, count in ranked:
        selected.append(decade)
        covered += count
        if covered / len(years) >= threshold:
            break

    return sorted(selected)


def effective_year_range(
    preferred_decades: list[int], confidence: Confidence
) -> YearRange | None:
    """Year window spanning the preferred decades plus a confidence buffer."""
    if confidence == "low" or not preferred_decades:
        return None

    buffer = HIGH_CONFIDENCE_BUFFER if confidence == "high" else MEDIUM_CONFIDENCE_BUFFER
    return YearRange(
        min=preferred_decades[0] - buffer,
        max=preferred_decades[-1] + 10 + buffer,
    )


def _build_preference(
    genre_id: str, years: list[int], catalog: GenreCatalog
) -> GenreYearPreference:
    sample_size = len(years)
    confidence = confidence_for_sample_size(sample_size)
    decades = extract_preferred_decades(years)

    return GenreYearPreference(
        genre_id=genre_id,
        genre_name=catalog.genre_display_name(genre_id) or genre_id,
        preferred_decades=decades,
        sample_size=sample_size,
        year_median=median_year(years),
        year_min=min(years),
        year_max=max(years),
        confidence=confidence,
        effective_year_range=effective_year_range(decades, confidence),
    )


def detect_year_preferences(
    contents: Iterable[Content],
    catalog: GenreCatalog = DEFAULT_CATALOG,
) -> list[GenreYearPreference]:
    """Year preferences for every unified genre found in `contents`.

    Items without a usable year or genre tags are skipped. An item's year is
    recorded once per unified genre its tags map to. Genres with the most
    observations come first.
    """
    genre_years: dict[str, list[int]] = defaultdict(list)

    for content in contents:
        year = extract_year(content)
        if year is None or not content.genre_ids:
            continue
        for unified_id in catalog.convert_external_to_unified(content.genre_ids, content.media_type):
            genre_years[unified_id].append(year)

    preferences = [
        _build_preference(genre_id, years, catalog)
        for genre_id, years in genre_years.items()
        if years
    ]
    preferences.sort(key=lambda p: p.sample_size, reverse=True)

    logger.debug(
        "Year preferences: %s",
        [(p.genre_id, p.confidence, p.preferred_decades) for p in preferences],
    )
    return preferences


def detect_collection_year_preferences(
    collections: UserCollections,
    catalog: GenreCatalog = DEFAULT_CATALOG,
) -> list[GenreYearPreference]:
    """Year preferences over liked, watchlist and collection items."""
    return detect_year_preferences(
        [*collections.liked, *collections.watchlist, *collections.collection_items],
        catalog,
    )
