"""
Configuration and settings for the catalog service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Database (Supabase Postgres connection string)
    database_url: Optional[str] = Field(default=None, env="DATABASE_URL")

    # Supabase REST (PostgREST) access
    supabase_url: Optional[str] = Field(default=None, env="SUPABASE_URL")
    supabase_key: Optional[str] = Field(default=None, env="SUPABASE_KEY")
    request_timeout_seconds: float = Field(
        default=10.0, env="REQUEST_TIMEOUT_SECONDS"
    )

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, env="USE_IN_MEMORY_BACKENDS"
    )
    seed_defaults: bool = Field(default=True, env="SEED_DEFAULTS")

    # Catalog / suggestions
    fallback_sector: str = Field(default="Other", env="FALLBACK_SECTOR")
    suggestion_limit: int = Field(default=5, env="SUGGESTION_LIMIT")
    suggestion_min_length: int = Field(default=2, env="SUGGESTION_MIN_LENGTH")
    suggestion_quiet_period_ms: int = Field(
        default=300, env="SUGGESTION_QUIET_PERIOD_MS"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
