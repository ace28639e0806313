"""
PDF text extraction using LangChain PyPDFLoader.

Fetches the raw bytes from the content store, writes them to a temporary
file and loads every page's text.

Dependencies: langchain_community.document_loaders, pypdf
System role: Default text extraction backend
"""

import asyncio
import logging
import os
import shutil
import tempfile

from langchain_community.document_loaders import PyPDFLoader

from funding_docs.boundary.ocr.base import TextExtractor
from funding_docs.boundary.storage.base import ContentStore

logger = logging.getLogger(__name__)


class PdfTextExtractor(TextExtractor):
    """Extract text layers from PDFs held in a content store."""

    def __init__(self, content_store: ContentStore, page_separator: str = "\n") -> None:
        """
        Initialize PDF text extractor.

        Args:
            content_store: Store the locators refer to
            page_separator: String placed between page texts
        """
        self._content_store = content_store
        self._page_separator = page_separator

    def _load_pages(self, data: bytes) -> list[str]:
        temp_dir = tempfile.mkdtemp(prefix="doc_pipeline_")
        local_path = os.path.join(temp_dir, "document.pdf")
        try:
            with open(local_path, "wb") as fh:
                fh.write(data)
            documents = PyPDFLoader(local_path).load()
            return [doc.page_content for doc in documents]
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

    async def extract_text(self, locator: str) -> str:
        """
        Extract all page text from the PDF at locator.

        Args:
            locator: Content store locator

        Returns:
            str: Page texts joined by the page separator
        """
        data = await self._content_store.get(locator)
        pages = await asyncio.to_thread(self._load_pages, data)

        logger.info(
            f"{__name__}:extract_text - Extracted {len(pages)} pages",
            extra={"locator": locator, "page_count": len(pages)},
        )
        return self._page_separator.join(pages)
