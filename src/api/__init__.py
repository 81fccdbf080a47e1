"""HTTP API routers."""

from src.api.router import api_router

__all__ = ["api_router"]
