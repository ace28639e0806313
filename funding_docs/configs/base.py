"""
Shared settings base.

Every settings class reads the same `.env` file; this module holds the
process-level values (deployment environment, debug flag, log level) that
the API and the batch processor both need.

Dependencies: pydantic_settings
System role: Root of the configuration tree
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Process-level settings inherited by the aggregated Settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment the service runs in",
    )
    debug: bool = Field(default=False, description="FastAPI debug mode")
    log_level: str = Field(default="INFO", description="Root logger level name")
