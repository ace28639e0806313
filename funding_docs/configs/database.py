"""
Registry database settings.

Production runs on PostgreSQL through asyncpg; local development and tests
point POSTGRES_URL at an aiosqlite file or memory database instead.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Database connection configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class DatabaseSettings(BaseSettings):
    """Connection and pool settings (POSTGRES_* environment variables)."""

    model_config = SettingsConfigDict(
        env_prefix="POSTGRES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    user: str = Field(default="postgres")
    password: str = Field(default="postgres")
    db: str = Field(default="funding_docs", description="Database name")
    require_ssl: bool = Field(default=False, description="Require TLS (managed Postgres)")

    url: str | None = Field(
        default=None,
        description="Complete async SQLAlchemy URL; takes precedence over the parts above",
    )

    pool_size: int = Field(default=10, description="Connection pool size (ignored on SQLite)")
    max_overflow: int = Field(default=20, description="Extra connections above pool_size")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def async_database_url(self) -> str:
        """SQLAlchemy async URL built from POSTGRES_URL or the individual parts."""
        if self.url:
            return self.url
        return URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
            query={"ssl": "require"} if self.require_ssl else {},
        ).render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        """True when the registry lives in SQLite (schema is created on startup)."""
        return self.async_database_url.startswith("sqlite")
