"""Text extraction backends."""

from funding_docs.boundary.ocr.base import TextExtractor
from funding_docs.boundary.ocr.pdf_text_extractor import PdfTextExtractor

__all__ = ["TextExtractor", "PdfTextExtractor"]
