"""
Ingestion result models.

Dependencies: pydantic, funding_docs.boundary.db.models
System role: Return type for DocumentIngestor.ingest()
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from funding_docs.boundary.db.models.document_model import DocumentModel
from funding_docs.core.document_processing.state_machine import (
    REPROCESSABLE_STATUSES,
    DocumentStatus,
)


class DuplicateDocumentRef(BaseModel):
    """The already-registered document whose fingerprint matched an upload."""

    id: UUID
    status: DocumentStatus
    display_name: str
    created_at: datetime
    can_reprocess: bool

    @classmethod
    def from_model(cls, document: DocumentModel) -> "DuplicateDocumentRef":
        return cls(
            id=document.id,
            status=document.status,
            display_name=document.display_name,
            created_at=document.created_at,
            can_reprocess=document.status in REPROCESSABLE_STATUSES,
        )


class IngestionResult(BaseModel):
    """Exactly one of created / duplicate is set."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    created: DocumentModel | None = None
    duplicate: DuplicateDocumentRef | None = None

    @property
    def is_duplicate(self) -> bool:
        return self.duplicate is not None
