"""
Document service orchestrator.

Coordinates document upload, listing, lookup and deletion for the API.
Processing runs are driven by BatchProcessor.

Dependencies: funding_docs.boundary.db, funding_docs.core
System role: Document management orchestration
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from funding_docs.boundary.db.CRUD.chunk_crud import chunk_crud
from funding_docs.boundary.db.CRUD.document_crud import document_crud
from funding_docs.boundary.db.models.document_model import DocumentModel
from funding_docs.core.document_processing.database.document_registry import DocumentRegistry
from funding_docs.core.document_processing.ingestor import DocumentIngestor
from funding_docs.core.document_processing.models import IngestionResult
from funding_docs.core.document_processing.state_machine import DocumentStatus
from funding_docs.core.exceptions import DocumentNotFoundError, PersistenceError

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Handles the request-scoped part of the document lifecycle: upload,
    listing, lookup, deletion.
    """

    def __init__(self, db: AsyncSession, ingestor: DocumentIngestor) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession scoped to the request
            ingestor: Deduplicating ingestor
        """
        self.db = db
        self._ingestor = ingestor

    async def upload_document(
        self,
        data: bytes,
        display_name: str,
        content_type: str,
    ) -> IngestionResult:
        """
        Ingest an uploaded file.

        Args:
            data: Raw file bytes
            display_name: Original filename
            content_type: Declared media type

        Returns:
            IngestionResult: New document or reference to the existing one

        Raises:
            ValidationError: Invalid upload
            StorageError: Content store failure
            PersistenceError: Registry failure
        """
        result = await self._ingestor.ingest(self.db, data, display_name, content_type)
        logger.info(
            f"{__name__}:upload_document - Upload handled",
            extra={"display_name": display_name, "is_duplicate": result.is_duplicate},
        )
        return result

    async def list_documents(
        self,
        page: int = 1,
        limit: int = 20,
        status: DocumentStatus | None = None,
        party_name: str | None = None,
        region: str | None = None,
        search: str | None = None,
    ) -> tuple[Sequence[DocumentModel], int]:
        """
        Get one page of documents, newest first.

        Args:
            page: 1-based page number
            limit: Page size
            status: Status filter
            party_name: Party filter
            region: Region filter
            search: Filename substring

        Returns:
            (documents, total matching count)
        """
        try:
            return await document_crud.list_documents(
                self.db,
                status=status,
                party_name=party_name,
                region=region,
                search=search,
                limit=limit,
                offset=(page - 1) * limit,
            )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list documents: {e}") from e

    async def get_document(self, doc_id: UUID) -> DocumentModel:
        """
        Get a document by id.

        Raises:
            DocumentNotFoundError: No such document
        """
        document = await DocumentRegistry(self.db).get(doc_id)
        if document is None:
            raise DocumentNotFoundError(str(doc_id))
        return document

    async def count_chunks(self, doc_id: UUID) -> int:
        """Number of indexed chunks stored for a document."""
        try:
            return await chunk_crud.count_by_document_id(self.db, doc_id)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to count chunks for {doc_id}: {e}") from e

    async def delete_document(self, doc_id: UUID) -> None:
        """
        Delete a document and its chunks.

        The stored content blob is kept; identical re-uploads reuse it.

        Raises:
            DocumentNotFoundError: No such document
        """
        deleted = await DocumentRegistry(self.db).delete(doc_id)
        if not deleted:
            raise DocumentNotFoundError(str(doc_id))
        logger.info(
            f"{__name__}:delete_document - Document deleted",
            extra={"doc_id": str(doc_id)},
        )
