"""
Passage CRUD operations.

Adds pgvector cosine-distance search to BaseCRUD for PassageModel.

Dependencies: sqlalchemy, pgvector, rag_engine.boundary.db.models
System role: Passage persistence and similarity search
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rag_engine.boundary.db.CRUD.base_crud import BaseCRUD
from rag_engine.boundary.db.models.document_model import DocumentModel
from rag_engine.boundary.db.models.passage_model import PassageModel


class PassageCRUD(BaseCRUD[PassageModel]):
    """CRUD operations for PassageModel."""

    def __init__(self) -> None:
        """Initialize PassageCRUD with PassageModel."""
        super().__init__(PassageModel)

    async def search_similar(
        self,
        session: AsyncSession,
        embedding: Sequence[float],
        limit: int,
        threshold: float,
        owner_id: UUID | None = None,
    ) -> list[tuple[PassageModel, str, float]]:
        """
        Find passages closest to an embedding by cosine distance.

        Similarity is 1 - cosine distance. Rows below the threshold are
        excluded in SQL; ties are ordered by chunk index, then passage ID.

        Args:
            session: Async database session
            embedding: Query vector
            limit: Maximum rows
            threshold: Minimum similarity
            owner_id: Restrict to documents owned by this user

        Returns:
            list of (passage, document title, similarity) tuples, best first
        """
        distance = PassageModel.embedding.cosine_distance(list(embedding))
        stmt = (
            select(PassageModel, DocumentModel.title, (1 - distance).label("similarity"))
            .join(DocumentModel, PassageModel.document_id == DocumentModel.id)
            .where(distance <= 1 - threshold)
            .order_by(distance, PassageModel.chunk_index, PassageModel.id)
            .limit(limit)
        )
        if owner_id is not None:
            stmt = stmt.where(DocumentModel.owner_id == owner_id)

        result = await session.execute(stmt)
        return [(row[0], row[1], float(row[2])) for row in result.all()]


passage_crud = PassageCRUD()
