"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite database, session factory, collaborator fakes,
pipeline settings and a recording observability sink.
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import hashlib
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from funding_docs.boundary.db import models  # noqa: F401  registers tables
from funding_docs.boundary.db.base import Base
from funding_docs.boundary.db.connection import build_async_engine
from funding_docs.boundary.embeddings.base import Embedder
from funding_docs.boundary.ocr.base import TextExtractor
from funding_docs.boundary.storage.base import ContentStore
from funding_docs.core.document_processing.configs import DocumentPipelineSettings
from funding_docs.core.exceptions import StorageError
from funding_docs.observability.sink import ObservabilitySink

EMBEDDING_DIMENSION = 8

SAMPLE_TEXT = (
    "政治資金収支報告書\n"
    "収入の部。寄付金は1,000,000円です。政党交付金は5,000,000円です。\n"
    "支出の部。人件費は2,000,000円です！事務所費は1,500,000円ですか？\n"
    "合計は6,500,000円です。"
)


class FakeContentStore(ContentStore):
    """In-memory content store."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self.put_calls = 0
        self.fail_put = False

    async def put(self, data: bytes, fingerprint: str, content_type: str) -> str:
        self.put_calls += 1
        if self.fail_put:
            raise StorageError("bucket unavailable")
        locator = f"memory://{self.object_key(fingerprint)}"
        self.blobs[locator] = data
        return locator

    async def get(self, locator: str) -> bytes:
        if locator not in self.blobs:
            raise StorageError(f"unknown locator {locator}", locator)
        return self.blobs[locator]


class FakeTextExtractor(TextExtractor):
    """Returns canned text; specific locators can be made to fail."""

    def __init__(self, text: str = SAMPLE_TEXT) -> None:
        self.text = text
        self.failures: dict[str, Exception] = {}
        self.calls: list[str] = []

    async def extract_text(self, locator: str) -> str:
        self.calls.append(locator)
        if locator in self.failures:
            raise self.failures[locator]
        return self.text


class FakeEmbedder(Embedder):
    """Deterministic vectors derived from the chunk text."""

    def __init__(self, dimension: int = EMBEDDING_DIMENSION) -> None:
        self._dimension = dimension
        self.calls: list[str] = []
        self.fail_on_call: int | None = None

    @property
    def dimension(self) -> int:
        return self._dimension

    async def embed(self, text: str) -> list[float]:
        call_index = len(self.calls)
        self.calls.append(text)
        if self.fail_on_call is not None and call_index == self.fail_on_call:
            raise RuntimeError("embedding service unavailable")
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [digest[i] / 255.0 for i in range(self._dimension)]


class RecordingSink(ObservabilitySink):
    """Keeps every record for assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    async def record(self, level, message, fields=None) -> None:
        self.records.append((level, message, dict(fields or {})))

    def messages(self, level: str | None = None) -> list[str]:
        return [message for lvl, message, _ in self.records if level is None or lvl == level]


@pytest.fixture
async def engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session of one test
    """
    engine = build_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured like the application's."""
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(session_factory):
    """
    Single session for a test.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def pipeline_settings() -> DocumentPipelineSettings:
    """Pipeline settings sized for tests."""
    return DocumentPipelineSettings(
        max_upload_bytes=20 * 1024 * 1024,
        chunk_size=40,
        embedding_dimension=EMBEDDING_DIMENSION,
        ocr_timeout_seconds=1.0,
        embedding_timeout_seconds=1.0,
        storage_timeout_seconds=1.0,
        max_concurrency=1,
    )


@pytest.fixture
def content_store() -> FakeContentStore:
    return FakeContentStore()


@pytest.fixture
def text_extractor() -> FakeTextExtractor:
    return FakeTextExtractor()


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def pdf_bytes() -> bytes:
    """Small fake PDF payload."""
    return b"%PDF-1.4\n% funding report\n" + b"0" * 256


@pytest.fixture
def make_document(session_factory):
    """
    Factory inserting a document row directly in a given status.

    Returns:
        Callable: async (status=..., extracted_text=..., display_name=...) -> DocumentModel
    """
    from funding_docs.boundary.db.CRUD.document_crud import document_crud
    from funding_docs.core.document_processing.state_machine import DocumentStatus

    counter = {"n": 0}

    async def _make(
        status: DocumentStatus = DocumentStatus.PENDING,
        extracted_text: str | None = None,
        display_name: str = "report.pdf",
        **fields: Any,
    ):
        counter["n"] += 1
        fingerprint = hashlib.sha256(f"{display_name}-{counter['n']}".encode()).hexdigest()
        async with session_factory() as session:
            document = await document_crud.create(
                session,
                content_fingerprint=fingerprint,
                locator=f"memory://documents/{fingerprint[:2]}/{fingerprint}.pdf",
                display_name=display_name,
                size_bytes=1024,
                content_type="application/pdf",
                status=status,
                extracted_text=extracted_text,
                **fields,
            )
            await session.commit()
            return document

    return _make


@pytest.fixture
def batch_processor(session_factory, text_extractor, embedder, pipeline_settings, sink):
    """BatchProcessor wired to the in-memory database and fakes."""
    from funding_docs.core.document_processing.entrypoint import BatchProcessor
    from funding_docs.core.document_processing.tasks import (
        ChunkingTask,
        ExtractionTask,
        IndexingTask,
    )

    return BatchProcessor(
        session_factory=session_factory,
        extraction_task=ExtractionTask(text_extractor, timeout_seconds=1.0),
        indexing_task=IndexingTask(embedder, timeout_seconds=1.0),
        chunking_task=ChunkingTask(chunk_size=pipeline_settings.chunk_size),
        settings=pipeline_settings,
        sink=sink,
    )
