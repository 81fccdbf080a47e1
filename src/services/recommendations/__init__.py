"""Recommendation services package."""

from src.services.recommendations.discovery import DiscoveryPlanner, get_genre_based_recommendations
from src.services.recommendations.engine import RecommendationEngine
from src.services.recommendations.genres import DEFAULT_CATALOG, GenreCatalog, UnifiedGenre
from src.services.recommendations.merge import merge_recommendations
from src.services.recommendations.profile import build_profile
from src.services.recommendations.signals import calculate_genre_preferences
from src.services.recommendations.years import detect_year_preferences, extract_preferred_decades

__all__ = [
    "DEFAULT_CATALOG",
    "DiscoveryPlanner",
    "GenreCatalog",
    "RecommendationEngine",
    "UnifiedGenre",
    "build_profile",
    "calculate_genre_preferences",
    "detect_year_preferences",
    "extract_preferred_decades",
    "get_genre_based_recommendations",
    "merge_recommendations",
]
