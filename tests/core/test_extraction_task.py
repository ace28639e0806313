"""
Tests for the text extraction task.

Dependencies: pytest, unittest.mock, funding_docs.core.document_processing.tasks
System role: Extraction stage validation
"""

import asyncio
import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from funding_docs.core.document_processing.tasks import ExtractionTask
from funding_docs.core.exceptions import ExtractionError


@pytest.fixture
def document():
    return SimpleNamespace(id=uuid.uuid4(), locator="memory://documents/ab/abc.pdf")


class TestExtractionTask:
    """ExtractionTask.extract behavior."""

    async def test_returns_extracted_text(self, document) -> None:
        """Should pass the locator to the extractor and return its text."""
        # Arrange
        extractor = AsyncMock()
        extractor.extract_text.return_value = "収入の部。"
        task = ExtractionTask(extractor, timeout_seconds=1.0)

        # Act
        text = await task.extract(document)

        # Assert
        assert text == "収入の部。"
        extractor.extract_text.assert_awaited_once_with(document.locator)

    @pytest.mark.parametrize("blank", ["", "   \n\t  "])
    async def test_blank_text_is_an_extraction_error(self, document, blank: str) -> None:
        """Should reject empty or whitespace-only output."""
        extractor = AsyncMock()
        extractor.extract_text.return_value = blank
        task = ExtractionTask(extractor)

        with pytest.raises(ExtractionError, match="empty result"):
            await task.extract(document)

    async def test_collaborator_error_is_wrapped(self, document) -> None:
        """Should convert arbitrary extractor failures into ExtractionError."""
        extractor = AsyncMock()
        extractor.extract_text.side_effect = RuntimeError("OCR service down")
        task = ExtractionTask(extractor)

        with pytest.raises(ExtractionError) as exc_info:
            await task.extract(document)

        assert "OCR service down" in exc_info.value.message
        assert exc_info.value.details["document_id"] == str(document.id)

    async def test_timeout_is_an_extraction_error(self, document) -> None:
        """Should give up after the configured timeout."""

        async def slow(_locator: str) -> str:
            await asyncio.sleep(5)
            return "never"

        extractor = AsyncMock()
        extractor.extract_text.side_effect = slow
        task = ExtractionTask(extractor, timeout_seconds=0.01)

        with pytest.raises(ExtractionError, match="timed out"):
            await task.extract(document)
