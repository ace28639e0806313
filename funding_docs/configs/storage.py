"""
Content store configuration.

Settings for the raw document store: S3 bucket in production,
a local directory in development.

Dependencies: pydantic_settings
System role: Content store configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for content-addressed document storage."""

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="local",
        description="Storage backend: 's3' (production) or 'local' (development)",
    )
    bucket: str = Field(
        default="funding-docs-dev-documents",
        description="S3 bucket for raw document storage",
    )
    region: str = Field(
        default="ap-northeast-1",
        description="AWS region for S3 bucket",
    )
    prefix: str = Field(
        default="documents",
        description="Key prefix under which blobs are stored",
    )
    local_root: str = Field(
        default="./data/documents",
        description="Root directory for the local backend",
    )
