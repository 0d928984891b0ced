"""
Engine configuration using pydantic-settings.
Loads from environment variables (prefix AUTHORSHIP_) with .env file support.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine and API settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTHORSHIP_",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_v1_prefix: str = "/api/v1"
    project_name: str = "Authorship Governance Engine"
    version: str = "1.0.0"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Written into every provenance block as AuthorshipIntegrity:EngineVersion
    engine_version: str = "1.0"

    # In-memory audit trail bounds; oldest entries are evicted first
    audit_buffer_size: int = Field(default=10_000, ge=1)
    audit_record_limit: int = Field(default=5_000, ge=1)

    slow_request_ms: int = 500


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
