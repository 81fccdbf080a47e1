"""Genre catalog API endpoints."""

from typing import Annotated, Literal

from fastapi import APIRouter, HTTPException, Query

from src.models.schemas import UnifiedGenreRead
from src.services.recommendations.genres import DEFAULT_CATALOG

router = APIRouter(prefix="/genres", tags=["genres"])


@router.get("", response_model=list[UnifiedGenreRead])
async def list_genres(
    media_type: Literal["movie", "tv", "both"] = "both",
    child_safe: Annotated[bool, Query()] = False,
) -> list[UnifiedGenreRead]:
    """Unified genres for pickers, optionally child-safe only."""
    genres = DEFAULT_CATALOG.genres_for_media_type(media_type, child_safe_only=child_safe)
    return [UnifiedGenreRead.model_validate(g) for g in genres]


@router.get("/{genre_id}", response_model=UnifiedGenreRead)
async def get_genre(genre_id: str) -> UnifiedGenreRead:
    """One unified genre by id."""
    genre = DEFAULT_CATALOG.find_genre(genre_id)
    if genre is None:
        raise HTTPException(status_code=404, detail="Genre not found")
    return UnifiedGenreRead.model_validate(genre)
