"""Application configuration loaded from the environment."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the post store service."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "local"
    database_url: str = "sqlite+aiosqlite:///./posts.db"
    # Creates tables on startup instead of running Alembic migrations.
    auto_create_schema: bool = False

    jwt_secret_key: str = "change-me-outside-local-development-0000"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    log_level: str = "INFO"


settings = Settings()
