"""
Document registry.

Reads and writes document rows for the ingestor and the batch processor.
Every status change is a compare-and-set UPDATE guarded by the allowed
source statuses from the state machine, committed immediately:

    pending → ocr_processing → text_extraction_completed
            → indexing_processing → completed (or *_failed with error message)

Dependencies: sqlalchemy, funding_docs.boundary.db
System role: Document status persistence for the pipeline
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from funding_docs.boundary.db.base import utcnow
from funding_docs.boundary.db.CRUD.chunk_crud import chunk_crud
from funding_docs.boundary.db.CRUD.document_crud import document_crud
from funding_docs.boundary.db.models.document_model import ERROR_MESSAGE_LIMIT, DocumentModel
from funding_docs.core.document_processing.state_machine import (
    IN_FLIGHT_STATUSES,
    TRANSITIONS,
    DocumentStatus,
    PipelineStage,
    StageEvent,
    failure_status,
    next_status,
)
from funding_docs.core.exceptions import (
    ConcurrentTransitionError,
    DocumentNotFoundError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


def truncate_error(message: str) -> str:
    """Clip an error message to the stored column limit."""
    return message[:ERROR_MESSAGE_LIMIT] if len(message) > ERROR_MESSAGE_LIMIT else message


class DocumentRegistry:
    """Document persistence and guarded status transitions for one session."""

    def __init__(self, db_session: AsyncSession) -> None:
        """
        Initialize with database session.

        Args:
            db_session: AsyncSession owned by the caller
        """
        self.db = db_session
        # last status this registry read or wrote, per document
        self._observed: dict[UUID, DocumentStatus] = {}

    async def get(self, document_id: UUID) -> DocumentModel | None:
        """
        Fetch a document and remember its status.

        Args:
            document_id: Document UUID

        Returns:
            DocumentModel if found, None otherwise
        """
        try:
            document = await document_crud.get_by_id(self.db, document_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to read document {document_id}: {e}") from e

        if document is not None:
            self._observed[document.id] = document.status
        return document

    async def find_by_fingerprint(self, fingerprint: str) -> DocumentModel | None:
        """
        Look up a document by content fingerprint.

        Args:
            fingerprint: SHA-256 hex digest

        Returns:
            DocumentModel if already registered, None otherwise
        """
        try:
            return await document_crud.get_by_fingerprint(self.db, fingerprint)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to look up fingerprint {fingerprint}: {e}") from e

    async def create(self, **fields: Any) -> DocumentModel:
        """
        Insert a new pending document and commit.

        Args:
            **fields: DocumentModel column values

        Returns:
            DocumentModel: Persisted document

        Raises:
            IntegrityError: Fingerprint already registered (session rolled back)
            PersistenceError: Any other database failure
        """
        fields.setdefault("status", DocumentStatus.PENDING)
        try:
            document = await document_crud.create(self.db, **fields)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to create document: {e}") from e

        logger.info(
            f"{__name__}:create - Document created",
            extra={"document_id": str(document.id), "fingerprint": document.content_fingerprint},
        )
        return document

    async def delete(self, document_id: UUID) -> bool:
        """
        Delete a document and its chunks.

        Args:
            document_id: Document UUID

        Returns:
            bool: True if the document existed
        """
        try:
            await chunk_crud.delete_by_document_id(self.db, document_id)
            deleted = await document_crud.delete_by_id(self.db, document_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to delete document {document_id}: {e}") from e

        self._observed.pop(document_id, None)
        return deleted

    async def _transition(
        self,
        document_id: UUID,
        stage: PipelineStage,
        event: StageEvent,
        **values: Any,
    ) -> DocumentModel:
        sources, target = TRANSITIONS[(stage, event)]
        observed = self._observed.get(document_id)
        if observed is not None and observed not in IN_FLIGHT_STATUSES:
            # rejects table violations before touching the database
            next_status(observed, stage, event)

        try:
            document = await document_crud.transition(
                self.db, document_id, sources, status=target, **values
            )
            if document is None:
                current = await document_crud.get_status(self.db, document_id)
                await self.db.rollback()
                self._raise_rejected(document_id, stage, event, current, observed)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(
                f"Failed to apply {stage.value}/{event.value} to {document_id}: {e}"
            ) from e

        self._observed[document_id] = target
        logger.info(
            f"{__name__}:_transition - Document marked as {target.value}",
            extra={"document_id": str(document_id), "stage": stage.value, "event": event.value},
        )
        return document

    def _raise_rejected(
        self,
        document_id: UUID,
        stage: PipelineStage,
        event: StageEvent,
        current: DocumentStatus | None,
        observed: DocumentStatus | None,
    ) -> None:
        if current is None:
            raise DocumentNotFoundError(str(document_id))
        self._observed[document_id] = current
        if current != observed or current in IN_FLIGHT_STATUSES:
            raise ConcurrentTransitionError(
                f"Document {document_id} changed to {current.value} before "
                f"{stage.value}/{event.value} could be applied",
                document_id=str(document_id),
                current_status=current.value,
            )
        # observed == current and current is not a valid source
        next_status(current, stage, event)

    async def begin_extraction(self, document_id: UUID) -> DocumentModel:
        """Move to ocr_processing and clear both errors."""
        return await self._transition(
            document_id,
            PipelineStage.EXTRACTION,
            StageEvent.STARTED,
            extraction_error=None,
            indexing_error=None,
        )

    async def complete_extraction(self, document_id: UUID, text: str) -> DocumentModel:
        """Store extracted text and move to text_extraction_completed."""
        return await self._transition(
            document_id,
            PipelineStage.EXTRACTION,
            StageEvent.SUCCEEDED,
            extracted_text=text,
            extraction_error=None,
        )

    async def fail_extraction(self, document_id: UUID, error: str) -> DocumentModel:
        """Record the extraction error and move to ocr_failed."""
        return await self._transition(
            document_id,
            PipelineStage.EXTRACTION,
            StageEvent.FAILED,
            extraction_error=truncate_error(error),
            index_reference=None,
        )

    async def begin_indexing(self, document_id: UUID) -> DocumentModel:
        """Move to indexing_processing and clear the indexing error."""
        return await self._transition(
            document_id,
            PipelineStage.INDEXING,
            StageEvent.STARTED,
            indexing_error=None,
        )

    async def complete_indexing(self, document_id: UUID, index_reference: str) -> DocumentModel:
        """Store the index reference and move to completed."""
        return await self._transition(
            document_id,
            PipelineStage.INDEXING,
            StageEvent.SUCCEEDED,
            index_reference=index_reference,
            extraction_error=None,
            indexing_error=None,
            processed_at=utcnow(),
        )

    async def fail_indexing(self, document_id: UUID, error: str) -> DocumentModel:
        """Record the indexing error and move to indexing_failed."""
        return await self._transition(
            document_id,
            PipelineStage.INDEXING,
            StageEvent.FAILED,
            indexing_error=truncate_error(error),
            index_reference=None,
        )

    async def force_failure(
        self,
        document_id: UUID,
        stage: PipelineStage,
        error: str,
    ) -> DocumentModel:
        """
        Unconditionally put a document into the failure status of stage.

        Used when a stage dies with an unexpected exception, whatever status
        the row is in at that point. The other stage's error is cleared so
        only one error is ever set.

        Args:
            document_id: Document UUID
            stage: Stage that was running
            error: Error description

        Returns:
            DocumentModel: Updated document

        Raises:
            DocumentNotFoundError: Document no longer exists
            PersistenceError: Database failure
        """
        message = truncate_error(error)
        if stage is PipelineStage.EXTRACTION:
            values = {"extraction_error": message, "indexing_error": None}
        else:
            values = {"indexing_error": message, "extraction_error": None}
        target = failure_status(stage)

        try:
            document = await document_crud.update_by_id(
                self.db,
                document_id,
                status=target,
                index_reference=None,
                **values,
            )
            if document is None:
                await self.db.rollback()
                raise DocumentNotFoundError(str(document_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to force failure on {document_id}: {e}") from e

        self._observed[document_id] = target
        logger.warning(
            f"{__name__}:force_failure - Document forced to {target.value}",
            extra={"document_id": str(document_id), "stage": stage.value, "error_message": message},
        )
        return document
