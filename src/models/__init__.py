"""Pydantic models for recommendation inputs and outputs."""

from src.models.schemas import (
    Content,
    GenrePreference,
    GenreYearPreference,
    PersonalizedRequest,
    PersonalizedResponse,
    Recommendation,
    RecommendationProfile,
    UserCollections,
    UserGenrePreference,
    UserSignals,
    UserVotedContent,
    YearRange,
)

__all__ = [
    "Content",
    "GenrePreference",
    "GenreYearPreference",
    "PersonalizedRequest",
    "PersonalizedResponse",
    "Recommendation",
    "RecommendationProfile",
    "UserCollections",
    "UserGenrePreference",
    "UserSignals",
    "UserVotedContent",
    "YearRange",
]
