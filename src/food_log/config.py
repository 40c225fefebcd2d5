"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_DB_PATH = "~/.local/share/food_log/food_log.db"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    db_path: str = DEFAULT_DB_PATH
    host: str = "127.0.0.1"
    port: int = 12001
    lock_timeout_seconds: float = 5.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="FOOD_LOG_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
