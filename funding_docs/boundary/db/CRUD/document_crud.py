"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with registry-specific queries: fingerprint lookup, filtered listing and
compare-and-set status transitions.

Dependencies: sqlalchemy, funding_docs.boundary.db.models
System role: Document registry persistence operations
"""

from collections.abc import Iterable
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from funding_docs.boundary.db.models.document_model import DocumentModel, DocumentStatus
from funding_docs.boundary.db.CRUD.base_crud import BaseCRUD


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with fingerprint lookup, list filters matching the
    admin console (status, party, region, filename search) and guarded
    status updates.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_fingerprint(
        self,
        session: AsyncSession,
        fingerprint: str,
    ) -> DocumentModel | None:
        """
        Retrieve the document registered for a content fingerprint.

        Args:
            session: Async database session
            fingerprint: SHA-256 hex digest of the upload

        Returns:
            DocumentModel if the content is already registered, None otherwise
        """
        stmt = select(DocumentModel).where(DocumentModel.content_fingerprint == fingerprint)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    def _filtered(
        self,
        stmt,
        status: DocumentStatus | None,
        party_name: str | None,
        region: str | None,
        search: str | None,
    ):
        if status is not None:
            stmt = stmt.where(DocumentModel.status == status)
        if party_name:
            stmt = stmt.where(DocumentModel.party_name == party_name)
        if region:
            stmt = stmt.where(DocumentModel.region == region)
        if search:
            stmt = stmt.where(DocumentModel.display_name.ilike(f"%{search}%"))
        return stmt

    async def list_documents(
        self,
        session: AsyncSession,
        status: DocumentStatus | None = None,
        party_name: str | None = None,
        region: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[Sequence[DocumentModel], int]:
        """
        Retrieve documents newest first with optional filters.

        Args:
            session: Async database session
            status: Only documents in this status
            party_name: Only documents for this party
            region: Only documents for this region
            search: Case-insensitive substring of the filename
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            (page of DocumentModels, total matching count)
        """
        stmt = self._filtered(
            select(DocumentModel), status, party_name, region, search
        ).order_by(DocumentModel.created_at.desc(), DocumentModel.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        count_stmt = self._filtered(
            select(func.count()).select_from(DocumentModel), status, party_name, region, search
        )

        result = await session.execute(stmt)
        total = await session.scalar(count_stmt)
        return result.scalars().all(), int(total or 0)

    async def transition(
        self,
        session: AsyncSession,
        id: UUID,
        allowed_from: Iterable[DocumentStatus],
        **values: Any,
    ) -> DocumentModel | None:
        """
        Update a document only while its status is one of allowed_from.

        The status check and the write are one UPDATE statement, so two
        writers racing on the same row cannot both succeed.

        Args:
            session: Async database session
            id: Document UUID
            allowed_from: Statuses the row must currently be in
            **values: Fields to write (normally including status)

        Returns:
            Updated DocumentModel, or None if the row is missing or its
            status was not in allowed_from
        """
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.id == id)
            .where(DocumentModel.status.in_(list(allowed_from)))
            .values(**values)
            .returning(DocumentModel)
            .execution_options(populate_existing=True, synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_status(self, session: AsyncSession, id: UUID) -> DocumentStatus | None:
        """
        Read only the current status of a document.

        Args:
            session: Async database session
            id: Document UUID

        Returns:
            DocumentStatus if the document exists, None otherwise
        """
        stmt = select(DocumentModel.status).where(DocumentModel.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


document_crud = DocumentCRUD()
