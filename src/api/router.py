"""Main API router."""

from fastapi import APIRouter

from src.api.genres import router as genres_router
from src.api.recommendations import router as recommendations_router

api_router = APIRouter(prefix="/api")

api_router.include_router(genres_router)
api_router.include_router(recommendations_router)
