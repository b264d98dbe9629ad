"""Environment-driven settings for the kitchen operations service.

Everything that differs between local dev, CI and Cloud Run is read here,
including which stock-count location the inventory checker compares against.
Services call get_settings() rather than reading os.environ.
"""
import os
from functools import lru_cache


class Settings:
    """Application settings loaded from environment variables."""

    # Database (DATABASE_URL overrides the composed Postgres URL)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    INSTANCE_CONNECTION_NAME: str = os.getenv("INSTANCE_CONNECTION_NAME", "")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: str = os.getenv("DB_PORT", "5432")
    DB_NAME: str = os.getenv("DB_NAME", "kitchen_ops")
    DB_USER: str = os.getenv("DB_USER", "kitchen_app")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")

    # Inventory check
    INVENTORY_LOCATION: str = os.getenv("INVENTORY_LOCATION", "Central Kitchen")
    RECIPE_MAX_DEPTH: int = int(os.getenv("RECIPE_MAX_DEPTH", "10"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    CORS_ORIGINS: list[str] = os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
    ).split(",")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
