"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: funding_docs.configs, funding_docs.application, funding_docs.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from funding_docs.application.services.document_service import DocumentService
from funding_docs.boundary.db import get_async_db, get_async_session_factory
from funding_docs.configs import get_settings
from funding_docs.core.document_processing.configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from funding_docs.core.document_processing.entrypoint import BatchProcessor
from funding_docs.core.document_processing.ingestor import DocumentIngestor
from funding_docs.observability.sink import ObservabilitySink, build_sink


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._content_store = None
        self._text_extractor = None
        self._embedder = None
        self._sink = None
        self._ingestor = None
        self._batch_processor = None

    @property
    def content_store(self):
        """Get cached content store."""
        if self._content_store is None:
            from funding_docs.boundary.storage.factory import get_content_store
            self._content_store = get_content_store()
        return self._content_store

    @property
    def text_extractor(self):
        """Get cached text extractor."""
        if self._text_extractor is None:
            from funding_docs.boundary.ocr.pdf_text_extractor import PdfTextExtractor
            self._text_extractor = PdfTextExtractor(content_store=self.content_store)
        return self._text_extractor

    @property
    def embedder(self):
        """Get cached embedder."""
        if self._embedder is None:
            from funding_docs.boundary.embeddings.factory import get_embedder
            self._embedder = get_embedder()
        return self._embedder

    @property
    def sink(self) -> ObservabilitySink:
        """Get cached observability sink."""
        if self._sink is None:
            observability = get_settings().observability
            self._sink = build_sink(
                session_factory=get_async_session_factory(),
                persist=observability.persist_system_logs,
                component=observability.component,
            )
        return self._sink

    @property
    def ingestor(self) -> DocumentIngestor:
        """Get cached document ingestor."""
        if self._ingestor is None:
            self._ingestor = DocumentIngestor(
                content_store=self.content_store,
                settings=get_pipeline_settings(),
                sink=self.sink,
            )
        return self._ingestor

    @property
    def batch_processor(self) -> BatchProcessor:
        """Get cached batch processor."""
        if self._batch_processor is None:
            from funding_docs.core.document_processing.tasks import (
                ChunkingTask,
                ExtractionTask,
                IndexingTask,
            )

            settings = get_pipeline_settings()
            self._batch_processor = BatchProcessor(
                session_factory=get_async_session_factory(),
                extraction_task=ExtractionTask(
                    self.text_extractor,
                    timeout_seconds=settings.ocr_timeout_seconds,
                ),
                indexing_task=IndexingTask(
                    self.embedder,
                    timeout_seconds=settings.embedding_timeout_seconds,
                ),
                chunking_task=ChunkingTask(chunk_size=settings.chunk_size),
                settings=settings,
                sink=self.sink,
            )
        return self._batch_processor

    def clear(self) -> None:
        """Clear all cached instances."""
        self._content_store = None
        self._text_extractor = None
        self._embedder = None
        self._sink = None
        self._ingestor = None
        self._batch_processor = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_pipeline_settings_dependency() -> DocumentPipelineSettings:
    """Get pipeline settings singleton."""
    return get_pipeline_settings()


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DocumentService: Document service bound to the request session
    """
    cache = get_service_cache()
    return DocumentService(db=db, ingestor=cache.ingestor)


def get_batch_processor() -> BatchProcessor:
    """
    Get batch processor instance.

    Returns:
        BatchProcessor: Processor opening its own session per document
    """
    return get_service_cache().batch_processor


def get_upload_processor(
    settings: DocumentPipelineSettings = Depends(get_pipeline_settings_dependency),
) -> BatchProcessor | None:
    """
    Get the processor that new uploads are queued on.

    Returns:
        BatchProcessor, or None when auto-processing on upload is disabled
    """
    if not settings.auto_process_on_upload:
        return None
    return get_service_cache().batch_processor
