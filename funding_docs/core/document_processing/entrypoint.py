"""
Batch document processor.

Takes a list of document ids and drives each one through extraction and
indexing, recording every status change in the registry. A failure in one
document is recorded as that document's result; it never stops the batch.

Dependencies: asyncio, sqlalchemy, task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .database.document_registry import DocumentRegistry
from .models import (
    BatchReport,
    ErrorKind,
    ProcessingFailure,
    ProcessingResult,
    ProcessingSuccess,
)
from .state_machine import DocumentStatus, PipelineStage, stage_for_status
from .tasks import ChunkingTask, ExtractionTask, IndexingTask
from funding_docs.core.exceptions import (
    ConcurrentTransitionError,
    DocumentNotFoundError,
    ExtractionError,
    IndexingError,
)
from funding_docs.observability.log_utils import log_exception_with_context
from funding_docs.observability.sink import LoggingSink, ObservabilitySink, emit

logger = logging.getLogger(__name__)

ALREADY_PROCESSED = "already processed"
PROCESSED = "processed successfully"


class BatchProcessor:
    """Orchestrate document processing: extract -> chunk -> embed+store."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        extraction_task: ExtractionTask,
        indexing_task: IndexingTask,
        chunking_task: ChunkingTask | None = None,
        settings: DocumentPipelineSettings | None = None,
        sink: ObservabilitySink | None = None,
    ) -> None:
        """
        Initialize processor with its collaborators.

        Args:
            session_factory: Factory for one database session per document
            extraction_task: Extraction stage
            indexing_task: Indexing stage
            chunking_task: Chunker (built from settings if None)
            settings: Pipeline settings (uses defaults if None)
            sink: Diagnostic sink (logs only if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._session_factory = session_factory
        self._extraction_task = extraction_task
        self._indexing_task = indexing_task
        self._chunking_task = chunking_task or ChunkingTask(chunk_size=self._settings.chunk_size)
        self._sink = sink or LoggingSink()

    async def process(
        self,
        document_ids: Sequence[str],
        reprocess: bool = False,
    ) -> BatchReport:
        """
        Process documents and report one result per id, in input order.

        Args:
            document_ids: Document ids as received from the caller
            reprocess: Re-run both stages even for completed documents

        Returns:
            BatchReport: Per-document results and totals
        """
        await self._record(
            "info",
            "Batch processing started",
            {"document_count": len(document_ids), "reprocess": reprocess},
        )

        max_concurrency = max(1, self._settings.max_concurrency)
        if max_concurrency == 1:
            results = [await self.process_document(raw_id, reprocess) for raw_id in document_ids]
        else:
            semaphore = asyncio.Semaphore(max_concurrency)

            async def bounded(raw_id: str) -> ProcessingResult:
                async with semaphore:
                    return await self.process_document(raw_id, reprocess)

            results = list(await asyncio.gather(*(bounded(raw_id) for raw_id in document_ids)))

        report = BatchReport(results=results)
        await self._record(
            "info",
            "Batch processing finished",
            {"total": report.total, "successful": report.successful, "failed": report.failed},
        )
        return report

    async def process_document(self, raw_id: str, reprocess: bool = False) -> ProcessingResult:
        """
        Process a single document in its own session.

        Args:
            raw_id: Document id as received (unparsable ids are not found)
            reprocess: Re-run both stages even if completed

        Returns:
            ProcessingResult: Success or failure for this document
        """
        try:
            document_id = UUID(str(raw_id))
        except ValueError:
            return self._not_found(raw_id)

        async with self._session_factory() as session:
            return await self._run(session, str(raw_id), document_id, reprocess)

    async def _record(self, level: str, message: str, fields: dict) -> None:
        await emit(self._sink, level, message, fields)

    def _not_found(self, raw_id) -> ProcessingFailure:
        return ProcessingFailure(
            document_id=str(raw_id),
            error_kind=ErrorKind.NOT_FOUND,
            detail=f"Document not found: {raw_id}",
        )

    async def _run(
        self,
        session: AsyncSession,
        raw_id: str,
        document_id: UUID,
        reprocess: bool,
    ) -> ProcessingResult:
        registry = DocumentRegistry(session)
        stage = PipelineStage.EXTRACTION

        try:
            document = await registry.get(document_id)
            if document is None:
                return self._not_found(raw_id)

            stage = stage_for_status(document.status)
            text = document.extracted_text

            if document.status == DocumentStatus.COMPLETED and not reprocess:
                return ProcessingSuccess(
                    document_id=raw_id,
                    message=ALREADY_PROCESSED,
                    index_reference=document.index_reference,
                    text_length=len(text) if text else None,
                )

            needs_extraction = (
                reprocess
                or not text
                or document.status in (DocumentStatus.PENDING, DocumentStatus.OCR_FAILED)
            )
            if needs_extraction:
                stage = PipelineStage.EXTRACTION
                await registry.begin_extraction(document_id)
                await self._record("info", "Extraction started", {"document_id": raw_id})
                try:
                    text = await self._extraction_task.extract(document)
                except ExtractionError as e:
                    await registry.fail_extraction(document_id, e.message)
                    await self._record(
                        "error",
                        "Extraction failed",
                        {"document_id": raw_id, "error": e.message},
                    )
                    return ProcessingFailure(
                        document_id=raw_id,
                        error_kind=ErrorKind.EXTRACTION_FAILED,
                        detail=e.message,
                    )
                await registry.complete_extraction(document_id, text)
                await self._record(
                    "info",
                    "Extraction completed",
                    {"document_id": raw_id, "text_length": len(text)},
                )

            stage = PipelineStage.INDEXING
            await registry.begin_indexing(document_id)
            await self._record("info", "Indexing started", {"document_id": raw_id})
            try:
                chunks = self._chunking_task.chunk(text)
                index_reference = await self._indexing_task.index(session, document_id, chunks)
            except IndexingError as e:
                await registry.fail_indexing(document_id, e.message)
                await self._record(
                    "error",
                    "Indexing failed",
                    {"document_id": raw_id, "error": e.message, **e.details},
                )
                return ProcessingFailure(
                    document_id=raw_id,
                    error_kind=ErrorKind.INDEXING_FAILED,
                    detail=e.message,
                )
            await registry.complete_indexing(document_id, index_reference)
            await self._record(
                "info",
                "Indexing completed",
                {
                    "document_id": raw_id,
                    "index_reference": index_reference,
                    "chunk_count": len(chunks),
                },
            )
            return ProcessingSuccess(
                document_id=raw_id,
                message=PROCESSED,
                index_reference=index_reference,
                text_length=len(text),
            )

        except ConcurrentTransitionError as e:
            await self._record(
                "warning",
                "Document changed by another run",
                {"document_id": raw_id, "current_status": e.current_status},
            )
            return ProcessingFailure(
                document_id=raw_id,
                error_kind=ErrorKind.CONCURRENT_UPDATE,
                detail=e.message,
            )
        except DocumentNotFoundError:
            # deleted while being processed
            return self._not_found(raw_id)
        except Exception as e:
            return await self._force_failure(session, registry, raw_id, document_id, stage, e)

    async def _force_failure(
        self,
        session: AsyncSession,
        registry: DocumentRegistry,
        raw_id: str,
        document_id: UUID,
        stage: PipelineStage,
        error: Exception,
    ) -> ProcessingFailure:
        detail = f"{type(error).__name__}: {error}"
        log_exception_with_context(
            logger,
            f"{__name__}:_force_failure - Unexpected error during {stage.value}",
            error,
            document_id=raw_id,
            stage=stage.value,
        )

        try:
            await session.rollback()
            await registry.force_failure(document_id, stage, detail)
        except Exception as force_error:
            log_exception_with_context(
                logger,
                f"{__name__}:_force_failure - Could not record failure status",
                force_error,
                document_id=raw_id,
                stage=stage.value,
            )

        await self._record(
            "error",
            "Processing aborted by unexpected error",
            {"document_id": raw_id, "stage": stage.value, "error": detail},
        )
        return ProcessingFailure(
            document_id=raw_id,
            error_kind=ErrorKind.UNEXPECTED,
            detail=detail,
        )
