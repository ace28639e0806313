"""
Document chunk ORM model.

Ordered text segments of a document's extracted text with their
embedding vectors. Keyed by (document_id, chunk_index).

Dependencies: sqlalchemy, funding_docs.boundary.db.base
System role: Chunk store persistence for retrieval
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from funding_docs.boundary.db.base import Base, utcnow


class DocumentChunkModel(Base):
    """
    Chunk of extracted text belonging to exactly one document.

    Chunks are written only by a successful indexing attempt and are
    never updated individually; a reprocess replaces the whole set.

    Attributes:
        document_id: Owning document (ON DELETE CASCADE)
        chunk_index: Position in reading order, starting at 0
        text: Substring of the document's extracted text
        embedding: Fixed-dimension vector as a JSON array
        created_at: Insertion timestamp (UTC)
    """

    __tablename__ = "document_chunks"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        primary_key=True,
    )

    chunk_index: Mapped[int] = mapped_column(Integer, primary_key=True)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    # Relationships
    document = relationship("DocumentModel", back_populates="chunks")
