"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_config_logger = logging.getLogger(__name__)

DEFAULT_ADMIN_PASSWORD = "admin123"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars not defined in the model
    )

    # App
    app_name: str = "SportSync API"
    app_version: str = "0.1.0"
    app_env: Literal["development", "test", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API Settings
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Storage
    storage_backend: Literal["memory", "database"] = "memory"
    database_url: str = "sqlite:///./sportsync.db"

    # Sessions
    session_cookie_name: str = "sportsync_session"
    session_max_age: int = 7 * 24 * 3600  # 1 week
    bcrypt_rounds: int = 10

    # Seed data
    seed_sample_data: bool = True
    admin_username: str = "admin"
    admin_email: str = "admin@sportsapp.com"
    admin_password: str = DEFAULT_ADMIN_PASSWORD

    # External news API (newsapi.org compatible)
    news_api_key: str = ""
    news_api_url: str = "https://newsapi.org/v2/everything"
    news_page_size: int = 5

    # Favorite match reminders
    reminder_sweep_enabled: bool = False
    reminder_sweep_minutes: int = 60

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_auth: str = "10/minute"

    # Monitoring
    sentry_dsn: str = ""

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @model_validator(mode="after")
    def validate_production_env(self) -> "Settings":
        """Reject production configurations that would lose data or stay open."""
        if self.app_env != "production":
            return self
        problems: list[str] = []
        if self.storage_backend != "database":
            problems.append("STORAGE_BACKEND must be 'database'")
        if self.seed_sample_data and self.admin_password == DEFAULT_ADMIN_PASSWORD:
            problems.append("ADMIN_PASSWORD must be changed from the default")
        if problems:
            raise ValueError(f"Invalid production configuration: {'; '.join(problems)}")
        if not self.news_api_key:
            _config_logger.warning("NEWS_API_KEY not set - sports news will be empty")
        if not self.sentry_dsn:
            _config_logger.warning("SENTRY_DSN not set - error monitoring disabled")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
