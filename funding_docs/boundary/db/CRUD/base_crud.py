"""
Generic single-table CRUD.

Model-specific CRUD classes (documents, chunks, system logs) inherit the
primary-key operations here and add their own queries. Nothing in this
module commits; callers own the transaction.

Dependencies: sqlalchemy
System role: Shared persistence operations
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from funding_docs.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Primary-key operations for one mapped class with an `id` column."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """
        Add a row and flush it so generated keys and defaults are populated.

        Args:
            session: Async database session
            **values: Column values

        Returns:
            The flushed instance
        """
        instance = self.model(**values)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: Any) -> ModelT | None:
        """Row with the given primary key, or None."""
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update_by_id(self, session: AsyncSession, id: Any, **values: Any) -> ModelT | None:
        """
        Overwrite columns of one row without reading it first.

        The returned instance reflects the new values even if an older copy
        was already loaded in the session.

        Returns:
            Updated instance, or None when no row has that key
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: Any) -> bool:
        """Delete one row; False when it did not exist."""
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0
