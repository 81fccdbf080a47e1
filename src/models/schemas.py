"""Pydantic schemas for recommendation inputs, outputs and API payloads."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MediaType = Literal["movie", "tv"]
Confidence = Literal["low", "medium", "high"]
GenreOpinion = Literal["love", "not_for_me"]
TitleVote = Literal["like", "dislike"]
RecommendationSource = Literal["genre_based", "tmdb_similar"]


# Content schemas
class Content(BaseModel):
    """A movie or TV show as returned by TMDB.

    Only the fields the engine reads are declared; anything else TMDB sends
    (poster paths, overview, ...) is kept as extra data and passed through.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    media_type: MediaType = "movie"
    genre_ids: list[int] = Field(default_factory=list)
    vote_average: float | None = None
    popularity: float | None = None
    release_date: str | None = None
    first_air_date: str | None = None
    title: str | None = None
    name: str | None = None

    @field_validator("genre_ids", mode="before")
    @classmethod
    def untagged_as_empty(cls, value: list[int] | None) -> list[int]:
        """TMDB omits or nulls genre tags on some items; treat them as untagged."""
        return [] if value is None else value

    @property
    def display_title(self) -> str:
        return self.title or self.name or ""


class YearRange(BaseModel):
    """Inclusive release-year window."""

    min: int
    max: int


# Signal schemas
class UserGenrePreference(BaseModel):
    """Explicit opinion on a unified genre (from the preference customizer)."""

    genre_id: str
    preference: GenreOpinion
    updated_at: int | None = None


class UserVotedContent(BaseModel):
    """Title-quiz vote. Genre ids are filled in from the user's collections."""

    content_id: int
    media_type: MediaType
    vote: TitleVote
    voted_at: int | None = None
    genre_ids: list[int] | None = None


class UserCollections(BaseModel):
    """Content lists the user has built up."""

    liked: list[Content] = Field(default_factory=list)
    watchlist: list[Content] = Field(default_factory=list)
    collection_items: list[Content] = Field(default_factory=list)
    hidden: list[Content] = Field(default_factory=list)


class UserSignals(UserCollections):
    """Every signal the engine scores: collections plus explicit feedback."""

    genre_preferences: list[UserGenrePreference] = Field(default_factory=list)
    voted_content: list[UserVotedContent] = Field(default_factory=list)


# Profile schemas
class GenrePreference(BaseModel):
    """Aggregated score for one external (TMDB) genre id."""

    genre_id: int
    genre_name: str
    score: float
    count: int


class GenreYearPreference(BaseModel):
    """Preferred release decades for one unified genre."""

    genre_id: str
    genre_name: str
    preferred_decades: list[int]
    sample_size: int
    year_median: int
    year_min: int
    year_max: int
    confidence: Confidence
    effective_year_range: YearRange | None = None


class RecommendationProfile(BaseModel):
    """Snapshot of a user's taste, rebuilt on every request."""

    user_id: str
    top_genres: list[GenrePreference] = Field(default_factory=list)
    preferred_rating: float | None = None
    preferred_year_range: YearRange | None = None
    genre_year_preferences: list[GenreYearPreference] = Field(default_factory=list)
    updated_at: datetime


# Recommendation schemas
class Recommendation(BaseModel):
    """A recommended item with where it came from and why."""

    content: Content
    source: RecommendationSource
    score: int
    reason: str
    generated_at: datetime


class PersonalizedRequest(UserSignals):
    """Body of the personalized recommendations endpoint."""

    limit: int = Field(default=20, ge=1)


class ProfileSummary(BaseModel):
    top_genres: list[GenrePreference]
    preferred_rating: float | None = None


class PersonalizedResponse(BaseModel):
    """Personalized recommendations or an empty "needs data" state."""

    recommendations: list[Recommendation] = Field(default_factory=list)
    profile: ProfileSummary | None = None
    total_count: int = 0
    requires_data: bool = False
    message: str | None = None
    generated_at: datetime


class UnifiedGenreRead(BaseModel):
    """Catalog entry as exposed over the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    movie_ids: list[int]
    tv_ids: list[int]
    child_safe: bool
