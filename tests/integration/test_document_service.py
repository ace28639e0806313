"""
Integration tests for DocumentService.

Dependencies: pytest, funding_docs.application.services, funding_docs.core
System role: Document management validation against a real schema
"""

import uuid

import pytest

from funding_docs.application.services.document_service import DocumentService
from funding_docs.boundary.db.CRUD.chunk_crud import chunk_crud
from funding_docs.core.document_processing.ingestor import DocumentIngestor
from funding_docs.core.document_processing.state_machine import DocumentStatus
from funding_docs.core.exceptions import DocumentNotFoundError


@pytest.fixture
def service(db_session, content_store, pipeline_settings, sink) -> DocumentService:
    ingestor = DocumentIngestor(content_store, settings=pipeline_settings, sink=sink)
    return DocumentService(db=db_session, ingestor=ingestor)


class TestUploadAndLookup:
    async def test_upload_then_get(self, service, pdf_bytes) -> None:
        result = await service.upload_document(pdf_bytes, "公明党_福岡県.pdf", "application/pdf")

        document = await service.get_document(result.created.id)

        assert document.display_name == "公明党_福岡県.pdf"
        assert document.status == DocumentStatus.PENDING
        assert await service.count_chunks(document.id) == 0

    async def test_get_missing_document(self, service) -> None:
        with pytest.raises(DocumentNotFoundError):
            await service.get_document(uuid.uuid4())

    async def test_delete_removes_chunks(self, service, db_session, make_document) -> None:
        document = await make_document(status=DocumentStatus.COMPLETED, extracted_text="本文。")
        await chunk_crud.add_chunk(db_session, document.id, 0, "本文。", [0.0] * 8)
        await db_session.commit()

        await service.delete_document(document.id)

        with pytest.raises(DocumentNotFoundError):
            await service.get_document(document.id)
        assert await service.count_chunks(document.id) == 0

    async def test_delete_missing_document(self, service) -> None:
        with pytest.raises(DocumentNotFoundError):
            await service.delete_document(uuid.uuid4())


class TestListDocuments:
    @pytest.fixture
    async def seeded(self, make_document):
        return [
            await make_document(display_name="自民党_東京都.pdf", party_name="自由民主党", region="東京"),
            await make_document(
                status=DocumentStatus.COMPLETED,
                display_name="公明党_大阪府.pdf",
                party_name="公明党",
                region="大阪",
            ),
            await make_document(
                status=DocumentStatus.OCR_FAILED,
                display_name="自民党_大阪府.pdf",
                party_name="自由民主党",
                region="大阪",
            ),
        ]

    async def test_lists_everything(self, service, seeded) -> None:
        documents, total = await service.list_documents()

        assert total == 3
        assert {d.id for d in documents} == {d.id for d in seeded}

    async def test_filters_combine(self, service, seeded) -> None:
        documents, total = await service.list_documents(party_name="自由民主党", region="大阪")

        assert total == 1
        assert documents[0].id == seeded[2].id

    async def test_status_filter(self, service, seeded) -> None:
        documents, total = await service.list_documents(status=DocumentStatus.COMPLETED)

        assert total == 1
        assert documents[0].display_name == "公明党_大阪府.pdf"

    async def test_filename_search(self, service, seeded) -> None:
        documents, total = await service.list_documents(search="大阪")

        assert total == 2
        assert all("大阪" in d.display_name for d in documents)

    async def test_pagination(self, service, seeded) -> None:
        first_page, total = await service.list_documents(page=1, limit=2)
        second_page, _ = await service.list_documents(page=2, limit=2)

        assert total == 3
        assert len(first_page) == 2
        assert len(second_page) == 1
        assert {d.id for d in first_page}.isdisjoint({d.id for d in second_page})
