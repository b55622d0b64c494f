"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables or a local .env file.
"""

import json
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_CANDIDATES = (
    "Ahmed Hefzy",
    "Ahmed Samy",
    "Ashraf El-Shabrawy",
    "Sameh Abdel Fattah",
    "Makram Radwan",
)


def _split_list(raw: str) -> list[str]:
    """Parse a JSON array or a comma-separated string into a list of strings."""
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return [item.strip() for item in raw.split(",") if item.strip()]
    if isinstance(parsed, list):
        return [str(item).strip() for item in parsed if str(item).strip()]
    return [str(parsed).strip()] if str(parsed).strip() else []


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "OneVote"
    APP_ENV: str = "development"
    DEBUG: bool = False

    # Database - any SQLAlchemy async URL (postgresql+asyncpg://, sqlite+aiosqlite://)
    # Left empty the store is treated as unavailable: reads degrade, votes fail.
    DATABASE_URL: str = ""
    DATABASE_ECHO: bool = False
    CREATE_SCHEMA_ON_STARTUP: bool = True

    # Upper bound for a single store round trip
    STORE_TIMEOUT_SECONDS: float = 5.0

    # Ballot - stored as comma-separated string to avoid pydantic-settings JSON parsing issues
    SEED_CANDIDATES: str = ",".join(DEFAULT_SEED_CANDIDATES)

    # CORS - stored as comma-separated string to avoid pydantic-settings JSON parsing issues
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @field_validator("STORE_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject timeouts that would make every store call fail."""
        if v <= 0:
            raise ValueError("STORE_TIMEOUT_SECONDS must be positive")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return _split_list(self.CORS_ORIGINS)

    @property
    def seed_candidates_list(self) -> list[str]:
        """Get the seed ballot as a list of display names, duplicates dropped."""
        names: list[str] = []
        for name in _split_list(self.SEED_CANDIDATES):
            if name not in names:
                names.append(name)
        return names


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
