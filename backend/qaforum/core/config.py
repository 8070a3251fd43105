"""
Q&A Forum Backend Configuration.

Environment-based configuration using Pydantic Settings.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Q&A Forum"
    app_version: str = "2.0.0"
    debug: bool = False

    # API
    api_prefix: str = "/v2"

    # Forum Module
    forum_max_author_length: int = 100
    forum_max_message_length: int = 5000

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    @field_validator("api_prefix", mode="before")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Ensure prefix starts with a slash and has no trailing one."""
        if isinstance(v, str):
            v = v.strip("/")
            return f"/{v}" if v else ""
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
