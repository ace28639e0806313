"""
Core business logic module.

Contains the document pipeline, the status state machine and the
exception hierarchy.
"""

from funding_docs.core.exceptions import (
    FundingDocsException,
    ValidationError,
    PayloadTooLargeError,
    StorageError,
    PersistenceError,
    DocumentNotFoundError,
    DocumentProcessingError,
    ExtractionError,
    IndexingError,
    InvalidTransitionError,
    ConcurrentTransitionError,
)

__all__ = [
    "FundingDocsException",
    "ValidationError",
    "PayloadTooLargeError",
    "StorageError",
    "PersistenceError",
    "DocumentNotFoundError",
    "DocumentProcessingError",
    "ExtractionError",
    "IndexingError",
    "InvalidTransitionError",
    "ConcurrentTransitionError",
]
