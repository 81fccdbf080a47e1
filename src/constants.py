"""Application constants - centralized configuration values."""

# =============================================================================
# Recommendation limits
# =============================================================================
DEFAULT_RECOMMENDATION_LIMIT = 20
MAX_RECOMMENDATION_LIMIT = 50
TOP_GENRES_COUNT = 5
GENRE_BASED_SHARE = 0.6  # Share of a personalized row filled by genre discovery
SIMILAR_SHARE = 0.4  # Share filled by TMDB "similar" content
MAX_SIMILAR_SEEDS = 3  # Liked items used as similar-content seeds
MAX_BATCH_SIMILAR_IDS = 5

# =============================================================================
# Discovery
# =============================================================================
TMDB_PAGE_SIZE = 20
FIRST_PAGE_GENRE_COUNT = 3
ROTATING_GENRE_COUNT = 5
GENRE_ROTATION_STEP = 2  # Genre slots the rotation advances per page
DEFAULT_MIN_RATING = 6.0
RATING_TOLERANCE = 1.0  # Discovery floor sits this far below the preferred rating
DISCOVERY_MIN_VOTE_COUNT = 200
TOP_RATED_MIN_VOTE_COUNT = 500
SORT_BY_RATING = "vote_average.desc"
SORT_BY_POPULARITY = "popularity.desc"

# =============================================================================
# Year preferences
# =============================================================================
YEAR_MIN_VALID = 1900
YEAR_MAX_VALID = 2050
LOW_CONFIDENCE_MAX = 3  # 1-3 items
MEDIUM_CONFIDENCE_MAX = 7  # 4-7 items, 8+ is high
MIN_ITEMS_PER_DECADE = 2
DECADE_COVERAGE_THRESHOLD = 0.6
HIGH_CONFIDENCE_BUFFER = 2  # years
MEDIUM_CONFIDENCE_BUFFER = 5  # years

# =============================================================================
# Cache TTLs (in seconds)
# =============================================================================
CACHE_TTL_DISCOVER = 60 * 60  # 1 hour
CACHE_TTL_SIMILAR = 6 * 60 * 60  # 6 hours

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
HTTPX_TIMEOUT = 10.0

# =============================================================================
# Media Types
# =============================================================================
TMDB_MEDIA_TYPE_MOVIE = "movie"
TMDB_MEDIA_TYPE_TV = "tv"

# =============================================================================
# External API URLs
# =============================================================================
TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
