"""
Chunk indexing task.

Embeds each chunk in order and stores it as (document_id, chunk_index,
text, embedding). Chunks from a previous attempt are deleted first. The
first failing chunk aborts the run; chunks flushed before an embedding
failure are left in the session for the caller to commit with the failure
status.

Dependencies: asyncio, sqlalchemy, funding_docs.boundary.embeddings, funding_docs.boundary.db
System role: Second stage of the document processing pipeline
"""

import asyncio
import logging
import time
import uuid
from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from funding_docs.boundary.db.CRUD.chunk_crud import chunk_crud
from funding_docs.boundary.embeddings.base import Embedder
from funding_docs.core.exceptions import IndexingError

logger = logging.getLogger(__name__)


def make_index_reference(document_id: UUID) -> str:
    """Process-unique reference for one successful indexing run."""
    return f"idx_{document_id.hex}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


class IndexingTask:
    """Embed and persist a document's chunks."""

    def __init__(self, embedder: Embedder, timeout_seconds: float = 30.0) -> None:
        """
        Initialize indexing task.

        Args:
            embedder: Embedding collaborator
            timeout_seconds: Upper bound for one embedding call
        """
        self._embedder = embedder
        self._timeout_seconds = timeout_seconds

    async def _embed(self, document_id: UUID, chunk_index: int, text: str) -> list[float]:
        try:
            vector = await asyncio.wait_for(
                self._embedder.embed(text),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise IndexingError(
                f"Embedding timed out after {self._timeout_seconds}s for chunk {chunk_index}",
                str(document_id),
                chunk_index,
            ) from e
        except Exception as e:
            raise IndexingError(
                f"Embedding failed for chunk {chunk_index}: {e}",
                str(document_id),
                chunk_index,
            ) from e

        if len(vector) != self._embedder.dimension:
            raise IndexingError(
                f"Embedding for chunk {chunk_index} has dimension {len(vector)}, "
                f"expected {self._embedder.dimension}",
                str(document_id),
                chunk_index,
            )
        return [float(value) for value in vector]

    async def index(
        self,
        session: AsyncSession,
        document_id: UUID,
        chunks: Sequence[str],
    ) -> str:
        """
        Index chunks for a document.

        Args:
            session: Session the chunk writes join (committed by the caller)
            document_id: Owning document
            chunks: Chunk texts; chunk_index is the position in this sequence

        Returns:
            str: New index reference

        Raises:
            IndexingError: No chunks, or an embedding / persistence failure
        """
        if not chunks:
            raise IndexingError("No chunks to index", str(document_id))

        try:
            removed = await chunk_crud.delete_by_document_id(session, document_id)
        except SQLAlchemyError as e:
            await session.rollback()
            raise IndexingError(f"Failed to clear previous chunks: {e}", str(document_id)) from e

        if removed:
            logger.info(
                f"{__name__}:index - Cleared {removed} chunks from a previous run",
                extra={"document_id": str(document_id)},
            )

        for chunk_index, text in enumerate(chunks):
            vector = await self._embed(document_id, chunk_index, text)
            try:
                await chunk_crud.add_chunk(session, document_id, chunk_index, text, vector)
            except SQLAlchemyError as e:
                await session.rollback()
                raise IndexingError(
                    f"Failed to persist chunk {chunk_index}: {e}",
                    str(document_id),
                    chunk_index,
                ) from e

        index_reference = make_index_reference(document_id)
        logger.info(
            f"{__name__}:index - Indexed {len(chunks)} chunks",
            extra={"document_id": str(document_id), "index_reference": index_reference},
        )
        return index_reference
