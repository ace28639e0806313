"""
Pipeline diagnostics settings.

Controls whether sink records from the ingestor and batch processor are
also persisted to the system_logs table, and under which component name.

Dependencies: pydantic_settings
System role: Observability configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """OBSERVABILITY_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OBSERVABILITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    persist_system_logs: bool = Field(
        default=False,
        description="Also write pipeline diagnostics to the system_logs table",
    )
    component: str = Field(
        default="pdf-pipeline",
        description="Component name stored with persisted diagnostics",
    )
