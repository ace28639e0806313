"""
Database models package.

Exports:
  - DocumentModel, DocumentStatus: Document ORM model and status enum
  - DocumentChunkModel: Chunk ORM model
  - SystemLogModel: Persisted diagnostic log entry

Dependencies: sqlalchemy, funding_docs.boundary.db.base
System role: Database model definitions for domain entities
"""

from funding_docs.boundary.db.models.document_model import DocumentModel, DocumentStatus
from funding_docs.boundary.db.models.chunk_model import DocumentChunkModel
from funding_docs.boundary.db.models.system_log_model import SystemLogModel

__all__ = [
    "DocumentModel",
    "DocumentStatus",
    "DocumentChunkModel",
    "SystemLogModel",
]
