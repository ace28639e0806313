"""
Text extraction (OCR) contract.

Dependencies: abc
System role: Interface for document text extraction backends
"""

from abc import ABC, abstractmethod


class TextExtractor(ABC):
    """Contract for services that turn a stored document into plain text."""

    @abstractmethod
    async def extract_text(self, locator: str) -> str:
        """
        Extract the full text of the document stored at locator.

        Args:
            locator: Content store locator

        Returns:
            str: Extracted text (may be blank; callers decide what blank means)

        Raises:
            Exception: Any backend failure; the extraction stage wraps it
        """
