"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - create_tables(): Schema creation
  - DocumentModel, DocumentChunkModel, SystemLogModel: Persisted entities
  - document_crud, chunk_crud, system_log_crud: CRUD operation singletons

Dependencies: sqlalchemy, funding_docs.configs
System role: Database adapter for the document registry and chunk store
"""

from funding_docs.boundary.db.base import Base, TimestampMixin, UUIDMixin
from funding_docs.boundary.db.connection import (
    build_async_engine,
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from funding_docs.boundary.db.models import (
    DocumentChunkModel,
    DocumentModel,
    DocumentStatus,
    SystemLogModel,
)
from funding_docs.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    DocumentCRUD,
    SystemLogCRUD,
    chunk_crud,
    document_crud,
    system_log_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "build_async_engine",
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "DocumentModel",
    "DocumentChunkModel",
    "DocumentStatus",
    "SystemLogModel",
    # CRUD classes
    "BaseCRUD",
    "DocumentCRUD",
    "ChunkCRUD",
    "SystemLogCRUD",
    # CRUD singletons
    "document_crud",
    "chunk_crud",
    "system_log_crud",
]
