"""Unified genre catalog.

Movies and TV shows use different TMDB genre taxonomies (movies have "Action"
28, TV only has "Action & Adventure" 10759). The app exposes one vocabulary of
unified genres and maps each entry to the TMDB ids valid per media type.

The catalog is an immutable value; scoring functions take it as an argument
and default to ``DEFAULT_CATALOG`` so tests can pass their own table.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from src.models.schemas import MediaType

UNKNOWN_GENRE_NAME = "Unknown"

# TMDB genre names by external id
TMDB_MOVIE_GENRES: dict[int, str] = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}

TMDB_TV_GENRES: dict[int, str] = {
    10759: "Action & Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    10762: "Kids",
    9648: "Mystery",
    10763: "News",
    10764: "Reality",
    10765: "Sci-Fi & Fantasy",
    10766: "Soap",
    10767: "Talk",
    10768: "War & Politics",
    37: "Western",
}


@dataclass(frozen=True)
class UnifiedGenre:
    """A genre in the app's own vocabulary."""

    id: str
    name: str
    movie_ids: tuple[int, ...]
    tv_ids: tuple[int, ...]
    child_safe: bool

    def ids_for(self, media_type: MediaType) -> tuple[int, ...]:
        return self.movie_ids if media_type == "movie" else self.tv_ids

    @property
    def all_ids(self) -> tuple[int, ...]:
        """Movie ids followed by TV ids, duplicates kept."""
        return self.movie_ids + self.tv_ids


class GenreCatalog:
    """Read-only lookup table of unified genres.

    Reverse lookups (TMDB id -> unified genre) are ambiguous: several unified
    genres share TMDB ids (TV "Mystery" 9648 backs horror, mystery and
    thriller). `genre_from_external_id` returns the first entry in catalog
    order; `genres_from_external_id` returns them all.
    """

    def __init__(
        self,
        genres: Iterable[UnifiedGenre],
        movie_genre_names: dict[int, str] | None = None,
        tv_genre_names: dict[int, str] | None = None,
    ) -> None:
        self._genres = tuple(genres)
        self._by_id: dict[str, UnifiedGenre] = {}
        for genre in self._genres:
            if genre.id in self._by_id:
                raise ValueError(f"Duplicate unified genre id: {genre.id}")
            if not genre.movie_ids and not genre.tv_ids:
                raise ValueError(f"Unified genre {genre.id} has no TMDB ids")
            self._by_id[genre.id] = genre
        self._movie_names = dict(movie_genre_names or {})
        self._tv_names = dict(tv_genre_names or {})

    def __iter__(self):
        return iter(self._genres)

    def __len__(self) -> int:
        return len(self._genres)

    @property
    def genres(self) -> tuple[UnifiedGenre, ...]:
        return self._genres

    def genres_for_media_type(
        self,
        media_type: MediaType | str = "both",
        child_safe_only: bool = False,
    ) -> list[UnifiedGenre]:
        """List genres for a picker.

        Every genre is returned regardless of media type so the list does not
        change when the user switches between movies and TV; a genre without
        ids for that type simply yields no discovery results.
        """
        if child_safe_only:
            return [g for g in self._genres if g.child_safe]
        return list(self._genres)

    def find_genre(self, genre_id: str) -> UnifiedGenre | None:
        return self._by_id.get(genre_id)

    def genre_from_external_id(
        self, external_id: int, media_type: MediaType
    ) -> UnifiedGenre | None:
        """First unified genre whose ids for `media_type` contain `external_id`."""
        for genre in self._genres:
            if external_id in genre.ids_for(media_type):
                return genre
        return None

    def genres_from_external_id(
        self, external_id: int, media_type: MediaType
    ) -> list[UnifiedGenre]:
        """All unified genres mapped to `external_id`, in catalog order."""
        return [g for g in self._genres if external_id in g.ids_for(media_type)]

    def translate_to_external_ids(
        self, unified_ids: Iterable[str], media_type: MediaType
    ) -> list[int]:
        """TMDB ids for a selection of unified genres, deduplicated.

        Unknown unified ids are skipped.
        """
        external: dict[int, None] = {}
        for unified_id in unified_ids:
            genre = self.find_genre(unified_id)
            if genre is None:
                continue
            for external_id in genre.ids_for(media_type):
                external[external_id] = None
        return list(external)

    def convert_external_to_unified(
        self, external_ids: Iterable[int], media_type: MediaType
    ) -> list[str]:
        """Unified ids for a content item's TMDB genre tags.

        Each TMDB id resolves to its first matching unified genre; the result
        is deduplicated and keeps first-seen order.
        """
        unified: dict[str, None] = {}
        for external_id in external_ids:
            genre = self.genre_from_external_id(external_id, media_type)
            if genre is not None:
                unified[genre.id] = None
        return list(unified)

    def genre_display_name(self, unified_id: str) -> str | None:
        genre = self.find_genre(unified_id)
        return genre.name if genre else None

    def is_available_for_media_type(self, unified_id: str, media_type: MediaType) -> bool:
        genre = self.find_genre(unified_id)
        return bool(genre and genre.ids_for(media_type))

    def validate_unified_ids(self, unified_ids: Iterable[str]) -> list[str]:
        """Drop unified ids that are not in the catalog."""
        return [genre_id for genre_id in unified_ids if genre_id in self._by_id]

    def external_genre_name(self, external_id: int) -> str:
        """TMDB genre name, movie table first, then TV."""
        if external_id in self._movie_names:
            return self._movie_names[external_id]
        if external_id in self._tv_names:
            return self._tv_names[external_id]
        return UNKNOWN_GENRE_NAME


UNIFIED_GENRES: tuple[UnifiedGenre, ...] = (
    UnifiedGenre("action", "Action", (28,), (10759,), True),
    UnifiedGenre("adventure", "Adventure", (12,), (10759,), True),
    UnifiedGenre("animation", "Animation", (16,), (16,), True),
    UnifiedGenre("comedy", "Comedy", (35,), (35,), True),
    UnifiedGenre("crime", "Crime", (80,), (80,), False),
    UnifiedGenre("documentary", "Documentary", (99,), (99,), True),
    UnifiedGenre("drama", "Drama", (18,), (18,), True),
    UnifiedGenre("family", "Family", (10751,), (10751,), True),
    UnifiedGenre("fantasy", "Fantasy", (14,), (10765,), True),
    # TV has no History genre; Documentary is the closest
    UnifiedGenre("history", "History", (36,), (99,), True),
    # TV horror is usually tagged Sci-Fi & Fantasy or Mystery
    UnifiedGenre("horror", "Horror", (27,), (10765, 9648), False),
    UnifiedGenre("kids", "Kids", (10751, 16), (10762,), True),
    UnifiedGenre("music", "Music", (10402,), (10402,), True),
    UnifiedGenre("mystery", "Mystery", (9648,), (9648,), True),
    UnifiedGenre("news", "News", (99,), (10763,), False),
    UnifiedGenre("reality", "Reality", (99,), (10764,), False),
    UnifiedGenre("romance", "Romance", (10749,), (18,), True),
    UnifiedGenre("scifi", "Science Fiction", (878,), (10765,), True),
    UnifiedGenre("soap", "Soap", (10749, 18), (10766,), False),
    UnifiedGenre("thriller", "Thriller", (53,), (9648, 80), False),
    UnifiedGenre("war", "War", (10752,), (10768,), True),
    UnifiedGenre("politics", "Politics", (18, 36), (10768,), False),
    UnifiedGenre("western", "Western", (37,), (37,), True),
)

DEFAULT_CATALOG = GenreCatalog(UNIFIED_GENRES, TMDB_MOVIE_GENRES, TMDB_TV_GENRES)
