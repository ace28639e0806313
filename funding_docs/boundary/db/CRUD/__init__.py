"""CRUD operations for database models."""

from funding_docs.boundary.db.CRUD.base_crud import BaseCRUD
from funding_docs.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from funding_docs.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from funding_docs.boundary.db.CRUD.system_log_crud import SystemLogCRUD, system_log_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "ChunkCRUD",
    "SystemLogCRUD",
    "document_crud",
    "chunk_crud",
    "system_log_crud",
]
