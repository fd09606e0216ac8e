"""
Application configuration using Pydantic Settings.

Centralizes all configuration with environment variable support.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Database (last birthdate + theme flag)
    database_url: str = "sqlite+aiosqlite:///./data/life_weeks.db"
    default_profile: str = "default"

    # Share image export
    export_dir: str = "~/Pictures/life-weeks"

    # Fact rotation interval shown by clients (seconds)
    fact_rotation_seconds: int = 6

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:8000"

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_to_file: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "LIFE_WEEKS_"
        extra = "ignore"  # Ignore extra env vars


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_export_dir() -> Path:
    """Resolve the configured export directory, expanding ``~``."""
    return Path(get_settings().export_dir).expanduser()


def get_cors_origins() -> list[str]:
    """Split the comma separated CORS origins setting."""
    raw = get_settings().cors_origins
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
