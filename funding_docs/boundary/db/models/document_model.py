"""
Document ORM model.

Represents uploaded funding reports with processing status and metadata.
Tracks the document lifecycle from upload to chunk indexing.

Dependencies: sqlalchemy, funding_docs.boundary.db.base
System role: Document registry persistence
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from funding_docs.boundary.db.base import Base, UUIDMixin, TimestampMixin
from funding_docs.core.document_processing.state_machine import DocumentStatus

ERROR_MESSAGE_LIMIT = 2000


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion pipeline state.

    Lifecycle: Upload (PENDING) → extraction (OCR_PROCESSING →
    TEXT_EXTRACTION_COMPLETED | OCR_FAILED) → indexing (INDEXING_PROCESSING →
    COMPLETED | INDEXING_FAILED).

    Attributes:
        id: UUID primary key (auto-generated)
        content_fingerprint: SHA-256 hex digest of the uploaded bytes (unique)
        locator: Content store reference to the raw bytes
        display_name: Original filename (255 char limit)
        size_bytes: Upload size
        content_type: Declared media type of the upload
        party_name: Political party inferred from the filename
        region: Prefecture inferred from the filename
        status: Current processing state
        extracted_text: Text returned by the OCR collaborator
        extraction_error: Set while status is OCR_FAILED
        indexing_error: Set while status is INDEXING_FAILED
        index_reference: Set only when status is COMPLETED
        processed_at: Time indexing last completed (UTC)
        created_at: Upload timestamp (UTC)
        updated_at: Last status change timestamp (UTC)

    Relationships:
        chunks: Owned DocumentChunkModel rows (cascade delete)
    """

    __tablename__ = "documents"

    content_fingerprint: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        doc="SHA-256 of the raw upload",
    )

    locator: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Content store locator for the raw document",
    )

    display_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original filename",
    )

    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)

    content_type: Mapped[str] = mapped_column(
        String(127),
        nullable=False,
        default="application/pdf",
    )

    party_name: Mapped[str] = mapped_column(String(64), nullable=False, default="unknown")

    region: Mapped[str] = mapped_column(String(64), nullable=False, default="unknown")

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=DocumentStatus.PENDING,
        index=True,
    )

    extracted_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    extraction_error: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if extraction failed",
    )

    indexing_error: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if indexing failed",
    )

    index_reference: Mapped[str | None] = mapped_column(String(255), nullable=True)

    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    chunks = relationship(
        "DocumentChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DocumentChunkModel.chunk_index",
    )

    @property
    def can_reprocess(self) -> bool:
        """True when the document sits in a failed state."""
        return self.status in (DocumentStatus.OCR_FAILED, DocumentStatus.INDEXING_FAILED)
