"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./snippets.db")

    # Session cookie
    session_secret: str = Field(default="change-me-in-production")
    session_cookie: str = Field(default="snippets_session")
    session_max_age: int = Field(default=1209600)  # 14 days

    # Users
    password_min_length: int = Field(default=10)

    # Logging
    log_level: str = Field(default="INFO")

    # API
    environment: str = Field(default="development")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.session_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("SESSION_SECRET must be changed in production")
            if self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should not use SQLite in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
