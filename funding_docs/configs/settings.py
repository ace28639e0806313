"""
Application settings root.

Each concern keeps its own env prefix (POSTGRES_, CONTENT_STORE_,
OBSERVABILITY_); this module nests them under one object and caches it.

Dependencies: funding_docs.configs.*
System role: Settings entry point for the service
"""

from functools import lru_cache

from pydantic import Field

from funding_docs.configs.base import BaseSettings
from funding_docs.configs.database import DatabaseSettings
from funding_docs.configs.observability import ObservabilitySettings
from funding_docs.configs.storage import StorageSettings


class Settings(BaseSettings):
    """Top-level settings: app-wide fields plus one section per concern."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


@lru_cache
def get_settings() -> Settings:
    """Settings read once from the environment and .env, then reused."""
    return Settings()
