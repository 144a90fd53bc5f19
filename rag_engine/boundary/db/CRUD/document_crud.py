"""
Document CRUD operations.

Provides owner-scoped queries for DocumentModel on top of BaseCRUD.

Dependencies: sqlalchemy, rag_engine.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rag_engine.boundary.db.CRUD.base_crud import BaseCRUD
from rag_engine.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with queries that never cross owner boundaries.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_owner_id(
        self,
        session: AsyncSession,
        owner_id: UUID,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve an owner's documents, newest first.

        Args:
            session: Async database session
            owner_id: Owning user UUID
            limit: Maximum number of documents to return

        Returns:
            Sequence of DocumentModels belonging to the owner
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_owned(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: UUID,
    ) -> DocumentModel | None:
        """Retrieve a document only if it belongs to owner_id."""
        stmt = select(DocumentModel).where(
            DocumentModel.id == id,
            DocumentModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_owned(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: UUID,
    ) -> DocumentModel | None:
        """
        Delete a document owned by owner_id.

        Passages go with it through the ON DELETE CASCADE foreign key.

        Args:
            session: Async database session
            id: Document UUID
            owner_id: Owning user UUID

        Returns:
            The deleted DocumentModel, None if absent or owned by someone else
        """
        document = await self.get_owned(session, id, owner_id)
        if document is None:
            return None
        await self.delete_by_id(session, id)
        return document


document_crud = DocumentCRUD()
