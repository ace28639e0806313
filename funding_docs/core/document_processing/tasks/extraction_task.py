"""
Text extraction task.

Runs the OCR collaborator for one document with a timeout and rejects
blank output, so nothing downstream ever indexes an empty document.

Dependencies: asyncio, funding_docs.boundary.ocr
System role: First stage of the document processing pipeline
"""

import asyncio
import logging

from funding_docs.boundary.db.models.document_model import DocumentModel
from funding_docs.boundary.ocr.base import TextExtractor
from funding_docs.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)


class ExtractionTask:
    """Extract text from a registered document."""

    def __init__(self, extractor: TextExtractor, timeout_seconds: float = 120.0) -> None:
        """
        Initialize extraction task.

        Args:
            extractor: OCR / text extraction collaborator
            timeout_seconds: Upper bound for one extraction call
        """
        self._extractor = extractor
        self._timeout_seconds = timeout_seconds

    async def extract(self, document: DocumentModel) -> str:
        """
        Extract the document's text.

        Args:
            document: Document whose locator is passed to the extractor

        Returns:
            str: Extracted text, non-blank

        Raises:
            ExtractionError: Extractor failed, timed out or returned blank text
        """
        document_id = str(document.id)
        try:
            text = await asyncio.wait_for(
                self._extractor.extract_text(document.locator),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise ExtractionError(
                f"Text extraction timed out after {self._timeout_seconds}s",
                document_id,
            ) from e
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(f"Text extraction failed: {e}", document_id) from e

        if not text or not text.strip():
            raise ExtractionError("empty result", document_id)

        logger.info(
            f"{__name__}:extract - Text extracted",
            extra={"document_id": document_id, "text_length": len(text)},
        )
        return text
