"""
Document domain models and schemas.

Request/response schemas for document operations. All responses use
camelCase keys.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from funding_docs.boundary.db.models.document_model import DocumentModel
from funding_docs.core.document_processing.models import (
    BatchReport,
    DuplicateDocumentRef,
    ProcessingFailure,
    ProcessingResult,
)
from funding_docs.core.document_processing.state_machine import REPROCESSABLE_STATUSES
from funding_docs.models.common import CamelModel, utc_timestamp


class DocumentResponse(CamelModel):
    """Response schema for a registered document."""

    id: uuid.UUID
    file_name: str
    file_size: int
    content_type: str
    content_fingerprint: str
    party_name: str
    region: str
    status: str
    upload_date: datetime
    updated_at: datetime
    processed_at: datetime | None = None
    extraction_error: str | None = None
    indexing_error: str | None = None
    index_reference: str | None = None
    text_length: int | None = None
    can_reprocess: bool = False

    @classmethod
    def from_model(cls, document: DocumentModel) -> "DocumentResponse":
        return cls(
            id=document.id,
            file_name=document.display_name,
            file_size=document.size_bytes,
            content_type=document.content_type,
            content_fingerprint=document.content_fingerprint,
            party_name=document.party_name,
            region=document.region,
            status=document.status.value,
            upload_date=document.created_at,
            updated_at=document.updated_at,
            processed_at=document.processed_at,
            extraction_error=document.extraction_error,
            indexing_error=document.indexing_error,
            index_reference=document.index_reference,
            text_length=len(document.extracted_text) if document.extracted_text else None,
            can_reprocess=document.status in REPROCESSABLE_STATUSES,
        )


class DocumentDetailResponse(CamelModel):
    """Single document lookup response."""

    success: bool = True
    document: DocumentResponse
    chunk_count: int = 0


class DuplicateDocumentResponse(CamelModel):
    """The existing document an upload duplicated."""

    id: uuid.UUID
    file_name: str
    status: str
    upload_date: datetime
    can_reprocess: bool

    @classmethod
    def from_ref(cls, ref: DuplicateDocumentRef) -> "DuplicateDocumentResponse":
        return cls(
            id=ref.id,
            file_name=ref.display_name,
            status=ref.status.value,
            upload_date=ref.created_at,
            can_reprocess=ref.can_reprocess,
        )


class DocumentUploadResponse(CamelModel):
    """Response schema for POST /documents."""

    success: bool = True
    is_duplicate: bool
    message: str
    document_id: uuid.UUID
    document: DocumentResponse | DuplicateDocumentResponse


class Pagination(CamelModel):
    """Page metadata for list responses."""

    page: int
    limit: int
    total: int
    total_pages: int


class DocumentListResponse(CamelModel):
    """Paginated document list response."""

    success: bool = True
    documents: list[DocumentResponse]
    pagination: Pagination
    timestamp: str = Field(default_factory=utc_timestamp)


class ProcessResultItem(CamelModel):
    """One document's outcome in a batch response."""

    document_id: str
    success: bool
    message: str | None = None
    error: str | None = None
    error_kind: str | None = None
    index_reference: str | None = None
    text_length: int | None = None

    @classmethod
    def from_result(cls, result: ProcessingResult) -> "ProcessResultItem":
        if isinstance(result, ProcessingFailure):
            return cls(
                document_id=result.document_id,
                success=False,
                error=result.detail,
                error_kind=result.error_kind.value,
            )
        return cls(
            document_id=result.document_id,
            success=True,
            message=result.message,
            index_reference=result.index_reference,
            text_length=result.text_length,
        )


class ProcessSummary(CamelModel):
    """Batch totals."""

    total: int
    successful: int
    failed: int


class ProcessDocumentsRequest(CamelModel):
    """Request schema for POST /documents/process."""

    document_ids: list[str] = Field(min_length=1, description="Documents to process, in order")
    reprocess: bool = Field(default=False, description="Re-run completed documents")


class ProcessDocumentsResponse(CamelModel):
    """Response schema for POST /documents/process."""

    success: bool = True
    results: list[ProcessResultItem]
    summary: ProcessSummary
    message: str
    request_id: str
    timestamp: str = Field(default_factory=utc_timestamp)

    @classmethod
    def from_report(cls, report: BatchReport, request_id: str) -> "ProcessDocumentsResponse":
        return cls(
            results=[ProcessResultItem.from_result(result) for result in report.results],
            summary=ProcessSummary(
                total=report.total,
                successful=report.successful,
                failed=report.failed,
            ),
            message=f"Processed {report.total} documents "
            f"({report.successful} succeeded, {report.failed} failed)",
            request_id=request_id,
        )
