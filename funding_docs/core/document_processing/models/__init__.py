"""
Models for document processing pipeline.

Exports: IngestionResult, DuplicateDocumentRef, ErrorKind, ProcessingSuccess,
ProcessingFailure, ProcessingResult, BatchReport
"""

from .ingestion_result import DuplicateDocumentRef, IngestionResult
from .pipeline_result import (
    BatchReport,
    ErrorKind,
    ProcessingFailure,
    ProcessingResult,
    ProcessingSuccess,
)

__all__ = [
    "DuplicateDocumentRef",
    "IngestionResult",
    "BatchReport",
    "ErrorKind",
    "ProcessingFailure",
    "ProcessingResult",
    "ProcessingSuccess",
]
