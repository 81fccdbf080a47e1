"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import RedisDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_name: str = "Reelscout"
    app_url: str = "http://localhost:8080"

    # Redis
    redis_url: RedisDsn = "redis://localhost:6379/0"  # type: ignore[assignment]
    cache_enabled: bool = True

    # External APIs
    tmdb_api_key: str = ""
    tmdb_language: str = "en-US"

    @field_validator("tmdb_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Ensure language looks like a TMDB locale (e.g. en-US)."""
        if len(v) != 5 or v[2] != "-":
            raise ValueError("TMDB_LANGUAGE must look like 'en-US'")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
