"""
Exception hierarchy for the funding document service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class FundingDocsException(Exception):
    """Base exception for all funding document service errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(FundingDocsException):
    """Raised when upload input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class PayloadTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured maximum size."""

    def __init__(self, size_bytes: int, max_bytes: int) -> None:
        super().__init__(
            f"File exceeds the maximum upload size of {max_bytes} bytes",
            field="file",
            details={"size_bytes": size_bytes, "max_bytes": max_bytes},
        )


class StorageError(FundingDocsException):
    """Raised when the content store is unavailable or rejects a payload."""

    def __init__(
        self,
        message: str,
        locator: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            locator: Content store locator involved, if known
            details: Additional context
        """
        details = details or {}
        if locator:
            details["locator"] = locator
        super().__init__(message, details)


class PersistenceError(FundingDocsException):
    """Raised when a registry or chunk store write fails."""

    pass


class DocumentNotFoundError(FundingDocsException):
    """Raised when a document id is unknown to the registry."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize document not found error.

        Args:
            document_id: ID of the missing document
            details: Additional context
        """
        details = details or {}
        details["document_id"] = document_id
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id}", details)


class DocumentProcessingError(FundingDocsException):
    """Base exception for pipeline stage errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ExtractionError(DocumentProcessingError):
    """Raised when OCR fails or yields no text."""

    pass


class IndexingError(DocumentProcessingError):
    """Raised when chunk embedding or chunk persistence fails."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        chunk_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if chunk_index is not None:
            details["chunk_index"] = chunk_index
        super().__init__(message, document_id, details)


class InvalidTransitionError(FundingDocsException):
    """Raised when a status transition is not allowed from the current state."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        current_status: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        if current_status:
            details["current_status"] = current_status
        self.current_status = current_status
        super().__init__(message, details)


class ConcurrentTransitionError(InvalidTransitionError):
    """Raised when another run changed the document status first."""

    pass
