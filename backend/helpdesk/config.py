"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): one instance per process
    - redis_url = None means the cache dependency is not configured

Design Decisions:
    - BaseSettings reads the process environment first, then .env
    - Every non-secret setting has a default matching docker-compose
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Application
    app_name: str = "Helpdesk API"
    app_env: Literal["development", "test", "production"] = "development"
    api_prefix: str = "/api/v1"

    # Database
    database_url: str = (
        "postgresql+asyncpg://helpdesk:helpdesk@db:5432/helpdesk"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Cache
    redis_url: str | None = None
    redis_connect_timeout_seconds: float = 2.0

    # Health
    health_probe_timeout_seconds: float = 5.0
    health_memory_warning_percent: float = 90.0

    # Auth
    bcrypt_rounds: int = 10

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
