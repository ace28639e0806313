"""
Document status state machine.

Defines the processing lifecycle of a document and the transitions the
batch processor may apply:

    pending ──► ocr_processing ──► text_extraction_completed
                    │                        │
                    ▼                        ▼
                ocr_failed          indexing_processing ──► completed
                                             │
                                             ▼
                                      indexing_failed

Transitions are keyed by the pipeline stage that is running and the event
it reports. Anything not in the table raises InvalidTransitionError.

Dependencies: funding_docs.core.exceptions
System role: Single source of truth for document status transitions
"""

import enum

from funding_docs.core.exceptions import InvalidTransitionError


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    PENDING: Uploaded and registered, not yet processed
    OCR_PROCESSING: Text extraction in flight
    TEXT_EXTRACTION_COMPLETED: Text stored, awaiting indexing
    OCR_FAILED: Extraction failed; extraction_error holds details
    INDEXING_PROCESSING: Chunk embedding in flight
    COMPLETED: Chunks embedded and stored, ready for retrieval
    INDEXING_FAILED: Indexing failed; indexing_error holds details
    """

    PENDING = "pending"
    OCR_PROCESSING = "ocr_processing"
    TEXT_EXTRACTION_COMPLETED = "text_extraction_completed"
    OCR_FAILED = "ocr_failed"
    INDEXING_PROCESSING = "indexing_processing"
    COMPLETED = "completed"
    INDEXING_FAILED = "indexing_failed"


class PipelineStage(str, enum.Enum):
    """Stage of the pipeline that is (or was last) running for a document."""

    EXTRACTION = "extraction"
    INDEXING = "indexing"


class StageEvent(str, enum.Enum):
    """Outcome reported by a stage."""

    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


IN_FLIGHT_STATUSES = frozenset(
    {DocumentStatus.OCR_PROCESSING, DocumentStatus.INDEXING_PROCESSING}
)

REPROCESSABLE_STATUSES = frozenset(
    {DocumentStatus.OCR_FAILED, DocumentStatus.INDEXING_FAILED}
)

# (stage, event) -> (allowed source statuses, target status)
TRANSITIONS: dict[
    tuple[PipelineStage, StageEvent],
    tuple[frozenset[DocumentStatus], DocumentStatus],
] = {
    (PipelineStage.EXTRACTION, StageEvent.STARTED): (
        frozenset(
            {
                DocumentStatus.PENDING,
                DocumentStatus.OCR_FAILED,
                DocumentStatus.TEXT_EXTRACTION_COMPLETED,
                DocumentStatus.COMPLETED,
                DocumentStatus.INDEXING_FAILED,
            }
        ),
        DocumentStatus.OCR_PROCESSING,
    ),
    (PipelineStage.EXTRACTION, StageEvent.SUCCEEDED): (
        frozenset({DocumentStatus.OCR_PROCESSING}),
        DocumentStatus.TEXT_EXTRACTION_COMPLETED,
    ),
    (PipelineStage.EXTRACTION, StageEvent.FAILED): (
        frozenset({DocumentStatus.OCR_PROCESSING}),
        DocumentStatus.OCR_FAILED,
    ),
    (PipelineStage.INDEXING, StageEvent.STARTED): (
        frozenset(
            {
                DocumentStatus.TEXT_EXTRACTION_COMPLETED,
                DocumentStatus.COMPLETED,
                DocumentStatus.INDEXING_FAILED,
            }
        ),
        DocumentStatus.INDEXING_PROCESSING,
    ),
    (PipelineStage.INDEXING, StageEvent.SUCCEEDED): (
        frozenset({DocumentStatus.INDEXING_PROCESSING}),
        DocumentStatus.COMPLETED,
    ),
    (PipelineStage.INDEXING, StageEvent.FAILED): (
        frozenset({DocumentStatus.INDEXING_PROCESSING}),
        DocumentStatus.INDEXING_FAILED,
    ),
}

FAILURE_STATUS: dict[PipelineStage, DocumentStatus] = {
    PipelineStage.EXTRACTION: DocumentStatus.OCR_FAILED,
    PipelineStage.INDEXING: DocumentStatus.INDEXING_FAILED,
}


def next_status(
    current: DocumentStatus,
    stage: PipelineStage,
    event: StageEvent,
) -> DocumentStatus:
    """
    Resolve the status reached by applying (stage, event) to current.

    Args:
        current: Status the document is in
        stage: Stage reporting the event
        event: Stage outcome

    Returns:
        DocumentStatus: Target status

    Raises:
        InvalidTransitionError: (current, stage, event) is not in the table
    """
    sources, target = TRANSITIONS[(stage, event)]
    if current not in sources:
        raise InvalidTransitionError(
            f"Cannot apply {stage.value}/{event.value} to a document in {current.value}",
            current_status=current.value,
        )
    return target


def failure_status(stage: PipelineStage) -> DocumentStatus:
    """Status a document is forced into when stage dies unexpectedly."""
    return FAILURE_STATUS[stage]


def stage_for_status(status: DocumentStatus) -> PipelineStage:
    """
    Stage a document belongs to given its persisted status.

    pending and every ocr_* status belong to extraction; everything else
    belongs to indexing.
    """
    if status in (
        DocumentStatus.PENDING,
        DocumentStatus.OCR_PROCESSING,
        DocumentStatus.OCR_FAILED,
    ):
        return PipelineStage.EXTRACTION
    return PipelineStage.INDEXING
