"""
System log ORM model.

Persisted pipeline diagnostics, written by SystemLogSink when
OBSERVABILITY_PERSIST_SYSTEM_LOGS is enabled.

Dependencies: sqlalchemy, funding_docs.boundary.db.base
System role: Durable diagnostic log for the admin console
"""

from datetime import datetime

from sqlalchemy import JSON, BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from funding_docs.boundary.db.base import Base, utcnow


class SystemLogModel(Base):
    """One diagnostic record emitted by a pipeline component."""

    __tablename__ = "system_logs"

    # BigInteger on Postgres, INTEGER on SQLite so autoincrement works there
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    level: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    component: Mapped[str] = mapped_column(String(64), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    fields: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )
