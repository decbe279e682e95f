"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from moviebot.constants import DEFAULT_RECOMMENDATION_COUNT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None

    # Secrets
    telegram_bot_token: str
    tmdb_api_key: str

    @field_validator("telegram_bot_token", "tmdb_api_key")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        """Reject empty credentials."""
        v = v.strip()
        if not v:
            raise ValueError("credential must not be empty")
        return v

    # Storage
    data_dir: Path = Path(".")
    movies_file: str = "filmes.json"
    recommendations_file: str = "recomendados.json"

    # Catalog
    tmdb_language: str = "pt-BR"

    # Bot
    bot_locale: str = "pt-BR"
    recommendations_per_request: int = DEFAULT_RECOMMENDATION_COUNT

    @field_validator("recommendations_per_request")
    @classmethod
    def validate_recommendation_count(cls, v: int) -> int:
        """Ensure at least one movie is sent per request."""
        if v < 1:
            raise ValueError("RECOMMENDATIONS_PER_REQUEST must be at least 1")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def movies_path(self) -> Path:
        """Location of the saved movies JSON file."""
        return self.data_dir / self.movies_file

    @property
    def recommendations_path(self) -> Path:
        """Location of the recommendation ledger JSON file."""
        return self.data_dir / self.recommendations_file


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
