"""
Tests for the chunk indexing task.

Dependencies: pytest, funding_docs.core.document_processing.tasks, funding_docs.boundary.db
System role: Indexing stage validation
"""

import re
import uuid

import pytest

from funding_docs.boundary.db.CRUD.chunk_crud import chunk_crud
from funding_docs.core.document_processing.tasks import IndexingTask, make_index_reference
from funding_docs.core.exceptions import IndexingError


def test_index_reference_format() -> None:
    """Should embed the document id and be unique per call."""
    document_id = uuid.uuid4()

    first = make_index_reference(document_id)
    second = make_index_reference(document_id)

    assert re.fullmatch(rf"idx_{document_id.hex}_\d+_[0-9a-f]{{8}}", first)
    assert first != second


class TestIndexingTask:
    """IndexingTask.index behavior against the in-memory database."""

    async def test_stores_chunks_in_order(self, db_session, make_document, embedder) -> None:
        """Should persist one row per chunk with a vector of the configured dimension."""
        # Arrange
        document = await make_document()
        task = IndexingTask(embedder)
        chunks = ["収入の部。", "支出の部。", "合計。"]

        # Act
        reference = await task.index(db_session, document.id, chunks)
        await db_session.commit()

        # Assert
        stored = await chunk_crud.get_by_document_id(db_session, document.id)
        assert reference.startswith(f"idx_{document.id.hex}_")
        assert [c.chunk_index for c in stored] == [0, 1, 2]
        assert [c.text for c in stored] == chunks
        assert all(len(c.embedding) == embedder.dimension for c in stored)

    async def test_reindex_replaces_previous_chunks(self, db_session, make_document, embedder) -> None:
        """Should delete chunks from an earlier run before inserting."""
        document = await make_document()
        task = IndexingTask(embedder)
        await task.index(db_session, document.id, ["一。", "二。", "三。"])
        await db_session.commit()

        await task.index(db_session, document.id, ["新しい本文。"])
        await db_session.commit()

        stored = await chunk_crud.get_by_document_id(db_session, document.id)
        assert [c.text for c in stored] == ["新しい本文。"]

    async def test_empty_chunk_list_is_rejected(self, db_session, embedder) -> None:
        """Should refuse to index nothing."""
        with pytest.raises(IndexingError, match="No chunks"):
            await IndexingTask(embedder).index(db_session, uuid.uuid4(), [])

    async def test_embedding_failure_stops_at_failing_chunk(
        self, db_session, make_document, embedder
    ) -> None:
        """Should abort on the first failing chunk and keep the earlier ones in the session."""
        document = await make_document()
        embedder.fail_on_call = 1
        task = IndexingTask(embedder)

        with pytest.raises(IndexingError) as exc_info:
            await task.index(db_session, document.id, ["一。", "二。", "三。"])

        assert exc_info.value.details["chunk_index"] == 1
        assert len(embedder.calls) == 2
        assert await chunk_crud.count_by_document_id(db_session, document.id) == 1

    async def test_wrong_dimension_is_rejected(self, db_session, make_document, embedder) -> None:
        """Should reject vectors that do not match the embedder dimension."""
        document = await make_document()

        class ShortEmbedder(type(embedder)):
            async def embed(self, text: str) -> list[float]:
                return [0.1, 0.2]

        with pytest.raises(IndexingError, match="dimension"):
            await IndexingTask(ShortEmbedder()).index(db_session, document.id, ["一。"])

    async def test_persistence_failure_is_an_indexing_error(self, db_session, embedder) -> None:
        """Should turn a chunk insert failure into IndexingError."""
        missing_document_id = uuid.uuid4()

        with pytest.raises(IndexingError, match="Failed to persist chunk 0"):
            await IndexingTask(embedder).index(db_session, missing_document_id, ["一。"])
