"""Application services."""

from funding_docs.application.services.document_service import DocumentService

__all__ = ["DocumentService"]
