"""
Document API endpoints.

Routes:
- POST /documents - Upload a PDF (deduplicated by content)
- POST /documents/process - Run extraction and indexing for a batch of documents
- GET /documents - List documents with filters and pagination
- GET /documents/{id} - Get one document
- DELETE /documents/{id} - Delete a document and its chunks

Dependencies: funding_docs.application.services, funding_docs.models
System role: Document HTTP API
"""

import logging
import math
import uuid
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, File, Query, Request, Response, UploadFile, status
from pydantic import ValidationError as PydanticValidationError

from funding_docs.api.deps import get_batch_processor, get_document_service, get_upload_processor
from funding_docs.application.services.document_service import DocumentService
from funding_docs.core.document_processing.entrypoint import BatchProcessor
from funding_docs.core.document_processing.state_machine import DocumentStatus
from funding_docs.core.exceptions import FundingDocsException, ValidationError
from funding_docs.models.document import (
    DocumentDetailResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentUploadResponse,
    DuplicateDocumentResponse,
    Pagination,
    ProcessDocumentsRequest,
    ProcessDocumentsResponse,
)
from funding_docs.observability.correlation import get_correlation_id

from .error_handling import handle_document_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

ALL = "all"


def _filter_value(value: str | None) -> str | None:
    if value is None or value == "" or value == ALL:
        return None
    return value


@router.post("", response_model=DocumentUploadResponse, status_code=status.HTTP_201_CREATED)
@handle_document_errors
async def upload_document(
    response: Response,
    background_tasks: BackgroundTasks,
    file: UploadFile | None = File(default=None),
    document_service: DocumentService = Depends(get_document_service),
    processor: BatchProcessor | None = Depends(get_upload_processor),
) -> DocumentUploadResponse:
    """
    Upload a funding report PDF.

    Identical content is registered once; re-uploads return the existing
    document with 200. New documents return 201 and, when auto-processing is
    enabled, are queued for extraction and indexing.

    Raises:
        400: Missing file, empty file or unsupported content type
        413: File larger than the configured limit
        500: Content store or registry failure
    """
    if file is None:
        raise ValidationError("Please select a file to upload", field="file")

    data = await file.read()
    result = await document_service.upload_document(
        data=data,
        display_name=file.filename or "",
        content_type=file.content_type or "",
    )

    if result.duplicate is not None:
        response.status_code = status.HTTP_200_OK
        return DocumentUploadResponse(
            is_duplicate=True,
            message="A file with the same content has already been uploaded",
            document_id=result.duplicate.id,
            document=DuplicateDocumentResponse.from_ref(result.duplicate),
        )

    document = result.created
    if processor is not None:
        background_tasks.add_task(processor.process, [str(document.id)], False)
        message = "Upload complete. Text extraction has been queued."
    else:
        message = "Upload complete."

    logger.info(
        "Document uploaded",
        extra={"document_id": str(document.id), "queued": processor is not None},
    )
    return DocumentUploadResponse(
        is_duplicate=False,
        message=message,
        document_id=document.id,
        document=DocumentResponse.from_model(document),
    )


@router.post("/process", response_model=ProcessDocumentsResponse, response_model_exclude_none=True)
@handle_document_errors
async def process_documents(
    request: Request,
    processor: BatchProcessor = Depends(get_batch_processor),
) -> ProcessDocumentsResponse:
    """
    Run extraction and indexing for the given documents, in order.

    Per-document failures are reported in `results`; the request itself
    only fails for a malformed body.

    Raises:
        400: documentIds missing, empty or not a list of strings
        500: Body is not valid JSON
    """
    request_id = get_correlation_id() or str(uuid.uuid4())

    try:
        body = await request.json()
    except ValueError as e:
        raise FundingDocsException("Request body is not valid JSON", {"reason": str(e)}) from e

    try:
        payload = ProcessDocumentsRequest.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError(
            "documentIds must be a non-empty array of document IDs",
            field="documentIds",
        ) from e

    logger.info(
        "Batch processing requested",
        extra={"request_id": request_id, "count": len(payload.document_ids), "reprocess": payload.reprocess},
    )
    report = await processor.process(payload.document_ids, reprocess=payload.reprocess)
    return ProcessDocumentsResponse.from_report(report, request_id)


@router.get("", response_model=DocumentListResponse)
@handle_document_errors
async def list_documents(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    status_filter: str | None = Query(default=None, alias="status"),
    party: str | None = Query(default=None),
    region: str | None = Query(default=None),
    search: str | None = Query(default=None),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """
    List documents newest first.

    `status`, `party` and `region` accept "all" to disable the filter;
    `search` matches a substring of the filename.
    """
    doc_status = None
    status_value = _filter_value(status_filter)
    if status_value is not None:
        try:
            doc_status = DocumentStatus(status_value)
        except ValueError as e:
            raise ValidationError(f"Unknown status: {status_value}", field="status") from e

    documents, total = await document_service.list_documents(
        page=page,
        limit=limit,
        status=doc_status,
        party_name=_filter_value(party),
        region=_filter_value(region),
        search=search or None,
    )

    return DocumentListResponse(
        documents=[DocumentResponse.from_model(doc) for doc in documents],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        ),
    )


@router.get("/{document_id}", response_model=DocumentDetailResponse)
@handle_document_errors
async def get_document(
    document_id: UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentDetailResponse:
    """
    Get one document with its chunk count.

    Raises:
        404: Document not found
    """
    document = await document_service.get_document(document_id)
    chunk_count = await document_service.count_chunks(document_id)
    return DocumentDetailResponse(
        document=DocumentResponse.from_model(document),
        chunk_count=chunk_count,
    )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_document_errors
async def delete_document(
    document_id: UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> Response:
    """
    Delete a document and its chunks.

    Raises:
        404: Document not found
    """
    await document_service.delete_document(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
