"""Recommendation engine for generating personalized recommendations."""

import asyncio
import math
from datetime import UTC, datetime

from src.constants import (
    GENRE_BASED_SHARE,
    MAX_RECOMMENDATION_LIMIT,
    MAX_SIMILAR_SEEDS,
    SIMILAR_SHARE,
)
from src.models.schemas import (
    Content,
    PersonalizedRequest,
    PersonalizedResponse,
    ProfileSummary,
    Recommendation,
    RecommendationProfile,
    UserSignals,
)
from src.services.metadata.tmdb import TMDBService
from src.services.recommendations.discovery import DiscoveryPlanner
from src.services.recommendations.genres import DEFAULT_CATALOG, GenreCatalog
from src.services.recommendations.merge import merge_recommendations
from src.services.recommendations.profile import build_profile, get_seen_content_ids, has_enough_data
from src.services.recommendations.signals import enrich_votes_with_genres
from src.utils.logging import get_logger

logger = get_logger(__name__)

NOT_ENOUGH_DATA_MESSAGE = (
    "Not enough user data for personalized recommendations. "
    "Add items to your watchlist or like some content to get started."
)


class RecommendationEngine:
    """Engine for generating personalized movie and TV recommendations.

    Strategy:
    1. Score TMDB genres from every user signal and build a profile
    2. Discover titles in the top genres (60% of the row)
    3. Fetch TMDB "similar" titles for the user's first liked items (40%)
    4. Merge both lists round-robin, dropping anything already seen
    """

    def __init__(
        self,
        tmdb: TMDBService | None = None,
        catalog: GenreCatalog = DEFAULT_CATALOG,
    ) -> None:
        self.catalog = catalog
        self.planner = DiscoveryPlanner(tmdb, catalog)

    def build_profile(self, user_id: str, signals: UserSignals) -> RecommendationProfile:
        """Profile over signals whose title votes carry genre tags."""
        enriched = signals.model_copy(
            update={"voted_content": enrich_votes_with_genres(signals.voted_content, signals)}
        )
        return build_profile(user_id, enriched, self.catalog)

    async def _similar_for_liked(
        self, liked: list[Content], limit: int, exclude_ids: set[int]
    ) -> list[Content]:
        if not liked:
            return []
        seeds = [item.id for item in liked[:MAX_SIMILAR_SEEDS]]
        similar = await self.planner.get_batch_similar_content(seeds, "movie", limit)
        return [item for item in similar if item.id not in exclude_ids]

    async def generate_personalized(
        self, user_id: str, request: PersonalizedRequest
    ) -> PersonalizedResponse:
        """Personalized row for a user, or an empty "requires data" answer."""
        limit = min(request.limit, MAX_RECOMMENDATION_LIMIT)
        now = datetime.now(UTC)

        has_preferences = bool(request.genre_preferences or request.voted_content)
        if not has_enough_data(request) and not has_preferences:
            logger.info(f"User {user_id} has no signals, skipping recommendations")
            return PersonalizedResponse(
                requires_data=True,
                message=NOT_ENOUGH_DATA_MESSAGE,
                generated_at=now,
            )

        profile = self.build_profile(user_id, request)
        exclude_ids = set(get_seen_content_ids(request))

        genre_based, similar = await asyncio.gather(
            self.planner.get_genre_based_recommendations(
                profile, math.ceil(limit * GENRE_BASED_SHARE), exclude_ids
            ),
            self._similar_for_liked(request.liked, math.ceil(limit * SIMILAR_SHARE), exclude_ids),
        )

        merged = merge_recommendations([genre_based, similar], limit)
        genre_based_ids = {item.id for item in genre_based}

        recommendations = []
        for index, content in enumerate(merged):
            if content.id in genre_based_ids:
                source = "genre_based"
                reason = f"Trending in {profile.top_genres[0].genre_name}" if profile.top_genres else ""
            else:
                source = "tmdb_similar"
                reason = f"Similar to {request.liked[0].display_title}" if request.liked else ""
            recommendations.append(
                Recommendation(
                    content=content,
                    source=source,
                    score=100 - index * 2,
                    reason=reason,
                    generated_at=now,
                )
            )

        logger.info(
            f"Generated {len(recommendations)} recommendations for user {user_id} "
            f"({len(genre_based)} genre-based, {len(similar)} similar)"
        )
        return PersonalizedResponse(
            recommendations=recommendations,
            profile=ProfileSummary(
                top_genres=profile.top_genres[:3],
                preferred_rating=profile.preferred_rating,
            ),
            total_count=len(recommendations),
            generated_at=now,
        )
