"""
Deduplicating document ingestor.

Validates an upload, fingerprints it, stores new content and registers a
pending document. Identical bytes always resolve to the first document
registered for them.

Dependencies: hashlib, sqlalchemy, funding_docs.boundary.storage
System role: Entry point of the ingestion pipeline
"""

import asyncio
import hashlib
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from funding_docs.boundary.storage.base import ContentStore
from funding_docs.core.document_processing.configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from funding_docs.core.document_processing.database.document_registry import DocumentRegistry
from funding_docs.core.document_processing.metadata_inference import infer_metadata
from funding_docs.core.document_processing.models.ingestion_result import (
    DuplicateDocumentRef,
    IngestionResult,
)
from funding_docs.core.exceptions import (
    PayloadTooLargeError,
    PersistenceError,
    StorageError,
    ValidationError,
)
from funding_docs.observability.sink import LoggingSink, ObservabilitySink, emit

logger = logging.getLogger(__name__)


def fingerprint(data: bytes) -> str:
    """SHA-256 hex digest of raw upload bytes."""
    return hashlib.sha256(data).hexdigest()


class DocumentIngestor:
    """Register uploads exactly once per distinct content."""

    def __init__(
        self,
        content_store: ContentStore,
        settings: DocumentPipelineSettings | None = None,
        sink: ObservabilitySink | None = None,
    ) -> None:
        """
        Initialize ingestor.

        Args:
            content_store: Store receiving new document bytes
            settings: Pipeline settings (uses defaults if None)
            sink: Diagnostic sink (logs only if None)
        """
        self._content_store = content_store
        self._settings = settings or get_pipeline_settings()
        self._sink = sink or LoggingSink()

    def validate(self, data: bytes, display_name: str, content_type: str) -> None:
        """
        Reject uploads before any side effect happens.

        Raises:
            ValidationError: Empty file, missing name or disallowed content type
            PayloadTooLargeError: File larger than the configured maximum
        """
        if not data:
            raise ValidationError("File is empty", field="file")
        if not display_name or not display_name.strip():
            raise ValidationError("File name is required", field="file")
        if len(data) > self._settings.max_upload_bytes:
            raise PayloadTooLargeError(len(data), self._settings.max_upload_bytes)
        if content_type not in self._settings.allowed_content_types:
            raise ValidationError(
                f"Unsupported content type: {content_type}",
                field="file",
                details={"allowed": list(self._settings.allowed_content_types)},
            )

    async def ingest(
        self,
        session: AsyncSession,
        data: bytes,
        display_name: str,
        content_type: str,
    ) -> IngestionResult:
        """
        Ingest an upload.

        Args:
            session: Database session for registry access
            data: Raw file bytes
            display_name: Original filename
            content_type: Declared media type

        Returns:
            IngestionResult: created document, or reference to the existing one

        Raises:
            ValidationError: Invalid upload (nothing stored)
            StorageError: Content store write failed (nothing registered)
            PersistenceError: Registry write failed
        """
        self.validate(data, display_name, content_type)

        content_fingerprint = fingerprint(data)
        registry = DocumentRegistry(session)

        existing = await registry.find_by_fingerprint(content_fingerprint)
        if existing is not None:
            await emit(
                self._sink,
                "info",
                "Duplicate upload detected",
                {"document_id": str(existing.id), "fingerprint": content_fingerprint},
            )
            return IngestionResult(duplicate=DuplicateDocumentRef.from_model(existing))

        try:
            locator = await asyncio.wait_for(
                self._content_store.put(data, content_fingerprint, content_type),
                timeout=self._settings.storage_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            await emit(
                self._sink,
                "error",
                "Content store write timed out",
                {"fingerprint": content_fingerprint, "display_name": display_name},
            )
            raise StorageError(
                f"Content store write timed out after {self._settings.storage_timeout_seconds}s"
            ) from e
        except StorageError as e:
            await emit(
                self._sink,
                "error",
                "Content store write failed",
                {"fingerprint": content_fingerprint, "error": e.message},
            )
            raise

        metadata = infer_metadata(display_name)
        try:
            document = await registry.create(
                content_fingerprint=content_fingerprint,
                locator=locator,
                display_name=display_name[:255],
                size_bytes=len(data),
                content_type=content_type,
                party_name=metadata.party_name,
                region=metadata.region,
            )
        except IntegrityError:
            # lost the race to a concurrent identical upload
            winner = await registry.find_by_fingerprint(content_fingerprint)
            if winner is None:
                raise PersistenceError(
                    "Document insert conflicted but no matching document was found",
                    {"fingerprint": content_fingerprint},
                )
            return IngestionResult(duplicate=DuplicateDocumentRef.from_model(winner))
        except PersistenceError as e:
            await emit(
                self._sink,
                "error",
                "Document registration failed",
                {"fingerprint": content_fingerprint, "locator": locator, "error": e.message},
            )
            raise

        await emit(
            self._sink,
            "info",
            "Document registered",
            {
                "document_id": str(document.id),
                "display_name": document.display_name,
                "size_bytes": document.size_bytes,
                "party_name": document.party_name,
                "region": document.region,
            },
        )
        return IngestionResult(created=document)
