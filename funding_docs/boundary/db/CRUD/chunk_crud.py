"""
Chunk CRUD operations.

Insert, list and bulk-delete operations for DocumentChunkModel.

Dependencies: sqlalchemy, funding_docs.boundary.db.models
System role: Chunk store persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from funding_docs.boundary.db.models.chunk_model import DocumentChunkModel
from funding_docs.boundary.db.CRUD.base_crud import BaseCRUD


class ChunkCRUD(BaseCRUD[DocumentChunkModel]):
    """CRUD operations for DocumentChunkModel keyed by (document_id, chunk_index)."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with DocumentChunkModel."""
        super().__init__(DocumentChunkModel)

    async def add_chunk(
        self,
        session: AsyncSession,
        document_id: UUID,
        chunk_index: int,
        text: str,
        embedding: list[float],
    ) -> DocumentChunkModel:
        """
        Insert one chunk and flush it.

        Args:
            session: Async database session
            document_id: Owning document
            chunk_index: Position in the chunk sequence
            text: Chunk text
            embedding: Chunk vector

        Returns:
            DocumentChunkModel: Persisted chunk
        """
        chunk = DocumentChunkModel(
            document_id=document_id,
            chunk_index=chunk_index,
            text=text,
            embedding=embedding,
        )
        session.add(chunk)
        await session.flush()
        return chunk

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[DocumentChunkModel]:
        """
        Retrieve a document's chunks in reading order.

        Args:
            session: Async database session
            document_id: Owning document

        Returns:
            Sequence of chunks ordered by chunk_index
        """
        stmt = (
            select(DocumentChunkModel)
            .where(DocumentChunkModel.document_id == document_id)
            .order_by(DocumentChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_document_id(self, session: AsyncSession, document_id: UUID) -> int:
        """Number of chunks stored for a document."""
        stmt = (
            select(func.count())
            .select_from(DocumentChunkModel)
            .where(DocumentChunkModel.document_id == document_id)
        )
        return int(await session.scalar(stmt) or 0)

    async def delete_by_document_id(self, session: AsyncSession, document_id: UUID) -> int:
        """
        Delete every chunk of a document.

        Args:
            session: Async database session
            document_id: Owning document

        Returns:
            int: Number of chunks deleted
        """
        stmt = delete(DocumentChunkModel).where(DocumentChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount


chunk_crud = ChunkCRUD()
