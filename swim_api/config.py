"""API configuration."""
from pydantic_settings import BaseSettings

from swim_engine.config import CACHE_EXPIRY_MINUTES, CACHE_STALE_MINUTES, DEFAULT_WINDOW_HOURS
from swim_engine.models.profile import SwimmerLevel


class Settings(BaseSettings):
    """Application settings."""

    # API settings
    api_title: str = "OptiSwim API"
    api_version: str = "1.0.0"
    cors_origins: list = ["http://localhost:5173", "http://localhost:3000"]

    # Scoring defaults
    default_level: SwimmerLevel = SwimmerLevel.INTERMEDIATE
    default_window_hours: int = DEFAULT_WINDOW_HOURS

    # Report cache
    cache_expiry_minutes: int = CACHE_EXPIRY_MINUTES
    cache_stale_minutes: int = CACHE_STALE_MINUTES
    max_cached_locations: int = 128

    class Config:
        env_prefix = "OPTISWIM_"


settings = Settings()
