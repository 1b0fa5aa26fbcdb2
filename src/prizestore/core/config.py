"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

from prizestore.core.constants import DEFAULT_PORT


class Settings(BaseSettings):
    """Prize store settings."""

    # App
    app_env: str = "development"
    app_host: str = "0.0.0.0"
    app_port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # Oracle Database
    oracle_dsn: str = "localhost:1521/FREEPDB1"
    oracle_user: str = "prizestore"
    oracle_password: str = ""
    oracle_pool_min: int = 1
    oracle_pool_max: int = 10
    oracle_pool_increment: int = 1

    # CORS
    cors_origins: str = "*"  # Comma-separated origins

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read from env and .env once.

    Call ``get_settings.cache_clear()`` after changing the environment.
    """
    return Settings()
