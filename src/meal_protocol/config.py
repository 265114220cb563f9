"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    foods_table: str = "foods"
    lookup_candidate_limit: int = 10
    lookup_concurrency: int = 4
    lookup_retry_attempts: int = 1
    lookup_retry_delay_seconds: float = 0.3
    lookup_cache_ttl_seconds: int = 3600
    not_found_marker: str = " (não encontrado)"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
