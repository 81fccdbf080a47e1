"""Recommendations API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.auth.dependencies import get_current_user_id
from src.constants import DEFAULT_RECOMMENDATION_LIMIT, MAX_RECOMMENDATION_LIMIT
from src.models.schemas import (
    Content,
    GenreYearPreference,
    MediaType,
    PersonalizedRequest,
    PersonalizedResponse,
    UserCollections,
    UserSignals,
)
from src.services.recommendations import RecommendationEngine
from src.services.recommendations.profile import get_seen_content_ids
from src.services.recommendations.years import detect_collection_year_preferences

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


def get_engine() -> RecommendationEngine:
    """Engine bound to the shared TMDB service."""
    return RecommendationEngine()


@router.post("/personalized", response_model=PersonalizedResponse)
async def personalized_recommendations(
    body: PersonalizedRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
    engine: Annotated[RecommendationEngine, Depends(get_engine)],
) -> PersonalizedResponse:
    """Personalized recommendations from the signals in the request body."""
    return await engine.generate_personalized(user_id, body)


@router.post("/genre-based", response_model=list[Content])
async def genre_based_recommendations(
    body: UserSignals,
    user_id: Annotated[str, Depends(get_current_user_id)],
    engine: Annotated[RecommendationEngine, Depends(get_engine)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_RECOMMENDATION_LIMIT)] = DEFAULT_RECOMMENDATION_LIMIT,
) -> list[Content]:
    """One page of genre discovery, excluding titles the user already has."""
    profile = engine.build_profile(user_id, body)
    return await engine.planner.get_genre_based_recommendations(
        profile, limit, get_seen_content_ids(body), page
    )


@router.post("/year-preferences", response_model=list[GenreYearPreference])
async def year_preferences(
    body: UserCollections,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> list[GenreYearPreference]:
    """Preferred release decades per genre."""
    preferences = detect_collection_year_preferences(body)
    logger.debug(f"User {user_id}: {len(preferences)} genre year preferences")
    return preferences


@router.get("/genre/{genre_id}", response_model=list[Content])
async def genre_recommendations(
    genre_id: int,
    user_id: Annotated[str, Depends(get_current_user_id)],
    engine: Annotated[RecommendationEngine, Depends(get_engine)],
    limit: Annotated[int, Query(ge=1, le=MAX_RECOMMENDATION_LIMIT)] = DEFAULT_RECOMMENDATION_LIMIT,
    media_type: MediaType = "movie",
    exclude: Annotated[list[int] | None, Query()] = None,
) -> list[Content]:
    """Top-rated titles for a TMDB genre id."""
    return await engine.planner.get_genre_recommendations(
        genre_id, limit, exclude or [], media_type
    )
