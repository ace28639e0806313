"""
Tests for the deduplicating document ingestor.

Dependencies: pytest, funding_docs.core.document_processing.ingestor
System role: Ingestion and deduplication validation
"""

import asyncio
import hashlib

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from funding_docs.boundary.db.models.document_model import DocumentModel
from funding_docs.core.document_processing.ingestor import DocumentIngestor, fingerprint
from funding_docs.core.document_processing.state_machine import DocumentStatus
from funding_docs.core.exceptions import PayloadTooLargeError, StorageError, ValidationError


@pytest.fixture
def ingestor(content_store, pipeline_settings, sink) -> DocumentIngestor:
    return DocumentIngestor(content_store, settings=pipeline_settings, sink=sink)


async def count_documents(session) -> int:
    return int(await session.scalar(select(func.count()).select_from(DocumentModel)) or 0)


def test_fingerprint_is_sha256_hex() -> None:
    assert fingerprint(b"abc") == hashlib.sha256(b"abc").hexdigest()


class TestIngest:
    """DocumentIngestor.ingest behavior."""

    async def test_new_upload_is_registered_pending(
        self, db_session, ingestor, content_store, pdf_bytes, sink
    ) -> None:
        """Should store the bytes and register a pending document."""
        # Act
        result = await ingestor.ingest(
            db_session, pdf_bytes, "自民党_東京都_2023.pdf", "application/pdf"
        )

        # Assert
        assert not result.is_duplicate
        document = result.created
        assert document.status == DocumentStatus.PENDING
        assert document.content_fingerprint == fingerprint(pdf_bytes)
        assert document.size_bytes == len(pdf_bytes)
        assert document.display_name == "自民党_東京都_2023.pdf"
        assert document.party_name == "自由民主党"
        assert document.region == "東京"
        assert content_store.blobs[document.locator] == pdf_bytes
        assert "Document registered" in sink.messages("info")

    async def test_identical_bytes_return_existing_document(
        self, db_session, ingestor, content_store, pdf_bytes
    ) -> None:
        """Should register identical content once regardless of filename."""
        first = await ingestor.ingest(db_session, pdf_bytes, "a.pdf", "application/pdf")

        second = await ingestor.ingest(db_session, pdf_bytes, "renamed.pdf", "application/pdf")

        assert second.is_duplicate
        assert second.duplicate.id == first.created.id
        assert second.duplicate.display_name == "a.pdf"
        assert second.duplicate.status == DocumentStatus.PENDING
        assert second.duplicate.can_reprocess is False
        assert content_store.put_calls == 1
        assert await count_documents(db_session) == 1

    async def test_duplicate_of_failed_document_can_be_reprocessed(
        self, db_session, ingestor, pdf_bytes
    ) -> None:
        """Should flag duplicates of failed documents as reprocessable."""
        first = await ingestor.ingest(db_session, pdf_bytes, "a.pdf", "application/pdf")
        first.created.status = DocumentStatus.OCR_FAILED
        await db_session.commit()

        second = await ingestor.ingest(db_session, pdf_bytes, "a.pdf", "application/pdf")

        assert second.duplicate.can_reprocess is True

    async def test_different_bytes_create_different_documents(
        self, db_session, ingestor, pdf_bytes
    ) -> None:
        first = await ingestor.ingest(db_session, pdf_bytes, "a.pdf", "application/pdf")
        second = await ingestor.ingest(db_session, pdf_bytes + b"x", "a.pdf", "application/pdf")

        assert second.created.id != first.created.id
        assert await count_documents(db_session) == 2

    async def test_unknown_filename_metadata(self, db_session, ingestor, pdf_bytes) -> None:
        """Should default party and region to unknown."""
        result = await ingestor.ingest(db_session, pdf_bytes, "report.pdf", "application/pdf")

        assert result.created.party_name == "unknown"
        assert result.created.region == "unknown"

    async def test_storage_failure_registers_nothing(
        self, db_session, ingestor, content_store, pdf_bytes, sink
    ) -> None:
        """Should raise StorageError and leave the registry untouched."""
        content_store.fail_put = True

        with pytest.raises(StorageError):
            await ingestor.ingest(db_session, pdf_bytes, "a.pdf", "application/pdf")

        assert await count_documents(db_session) == 0
        assert "Content store write failed" in sink.messages("error")

    async def test_storage_timeout_is_storage_error(
        self, db_session, content_store, pipeline_settings, pdf_bytes
    ) -> None:
        """Should give up on a hung content store."""

        async def hang(*_args, **_kwargs):
            await asyncio.sleep(5)

        content_store.put = hang
        settings = pipeline_settings.model_copy(update={"storage_timeout_seconds": 0.01})
        ingestor = DocumentIngestor(content_store, settings=settings)

        with pytest.raises(StorageError, match="timed out"):
            await ingestor.ingest(db_session, pdf_bytes, "a.pdf", "application/pdf")

        assert await count_documents(db_session) == 0

    async def test_sink_failure_does_not_fail_upload(
        self, db_session, content_store, pipeline_settings, pdf_bytes
    ) -> None:
        """Should register the document even when diagnostics cannot be recorded."""
        sink = AsyncMock()
        sink.record.side_effect = RuntimeError("sink down")
        ingestor = DocumentIngestor(content_store, settings=pipeline_settings, sink=sink)

        result = await ingestor.ingest(db_session, pdf_bytes, "report.pdf", "application/pdf")

        assert not result.is_duplicate
        assert await count_documents(db_session) == 1
        sink.record.assert_awaited()


class TestValidation:
    """Upload validation happens before any side effect."""

    async def test_empty_file(self, db_session, ingestor, content_store) -> None:
        with pytest.raises(ValidationError, match="empty"):
            await ingestor.ingest(db_session, b"", "a.pdf", "application/pdf")
        assert content_store.put_calls == 0

    async def test_missing_name(self, db_session, ingestor, pdf_bytes) -> None:
        with pytest.raises(ValidationError, match="name"):
            await ingestor.ingest(db_session, pdf_bytes, "  ", "application/pdf")

    async def test_wrong_content_type(self, db_session, ingestor, content_store, pdf_bytes) -> None:
        with pytest.raises(ValidationError, match="content type"):
            await ingestor.ingest(db_session, pdf_bytes, "a.txt", "text/plain")
        assert content_store.put_calls == 0

    async def test_oversized_file(self, db_session, content_store, pipeline_settings) -> None:
        """Should reject files above the configured limit."""
        settings = pipeline_settings.model_copy(update={"max_upload_bytes": 10})
        ingestor = DocumentIngestor(content_store, settings=settings)

        with pytest.raises(PayloadTooLargeError) as exc_info:
            await ingestor.ingest(db_session, b"x" * 11, "a.pdf", "application/pdf")

        assert exc_info.value.details["max_bytes"] == 10
        assert content_store.put_calls == 0
        assert await count_documents(db_session) == 0

    async def test_file_at_limit_is_accepted(self, db_session, content_store, pipeline_settings) -> None:
        settings = pipeline_settings.model_copy(update={"max_upload_bytes": 10})
        ingestor = DocumentIngestor(content_store, settings=settings)

        result = await ingestor.ingest(db_session, b"x" * 10, "a.pdf", "application/pdf")

        assert result.created is not None
