"""Application Configuration — database, HTTP listener and logging settings.

Invariants:
    - postgresql:// URLs are rewritten to postgresql+asyncpg:// before SQLAlchemy sees them
    - api_port defaults to 3000, the port existing clients call
    - get_settings() is cached (lru_cache): one Settings per process

Design Decisions:
    - pydantic-settings reads the environment and an optional .env file
    - Only the database credentials are deployment secrets; everything else has a default
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://users:users@db:5432/users"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
