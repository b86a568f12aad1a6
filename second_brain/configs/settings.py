"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from second_brain.configs.api import ApiSettings
from second_brain.configs.base import BaseSettings
from second_brain.configs.database import DatabaseSettings
from second_brain.configs.indexing import IndexingSettings
from second_brain.configs.provider import ProviderSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    indexing: IndexingSettings = Field(default_factory=IndexingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from second_brain.configs import get_settings
        settings = get_settings()
    """
    return Settings()
