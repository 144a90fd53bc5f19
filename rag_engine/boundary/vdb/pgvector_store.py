"""
PostgreSQL + pgvector passage store.

Production PassageStore. Every call runs in its own session and commits
before returning. A passage batch commits as one transaction, so a failed
batch writes nothing and leaves earlier batches in place.

Dependencies: sqlalchemy, pgvector, rag_engine.boundary.db
System role: Production persistence for documents, passages and similarity search
"""

import logging
from typing import Sequence
import uuid

from sqlalchemy.ext.asyncio import async_sessionmaker

from rag_engine.boundary.db.CRUD import document_crud, passage_crud
from rag_engine.boundary.db.models import DocumentModel, PassageModel
from rag_engine.models.document import Document, DocumentCreate
from rag_engine.models.passage import Passage, PassageCreate
from rag_engine.models.retrieval import SimilarityResult

logger = logging.getLogger(__name__)


def _to_document(model: DocumentModel) -> Document:
    return Document(
        id=model.id,
        title=model.title,
        content=model.content,
        source=model.source,
        metadata=model.metadata_ or {},
        owner_id=model.owner_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_passage(model: PassageModel) -> Passage:
    return Passage(
        id=model.id,
        document_id=model.document_id,
        content=model.content,
        chunk_index=model.chunk_index,
        embedding=[float(x) for x in model.embedding],
        metadata=model.metadata_ or {},
        created_at=model.created_at,
    )


class PgVectorStore:
    """
    PassageStore backed by the rag_documents / rag_passages tables.

    Attributes:
        _session_factory: Async session factory bound to the pgvector database
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize store.

        Args:
            session_factory: Factory from get_async_session_factory()
        """
        self._session_factory = session_factory

    async def save_document(self, record: DocumentCreate) -> Document:
        async with self._session_factory() as session:
            model = await document_crud.create(
                session,
                title=record.title,
                content=record.content,
                source=record.source,
                metadata_=record.metadata,
                owner_id=record.owner_id,
            )
            await session.commit()

        logger.debug(
            f"{__name__}:save_document - Saved document",
            extra={"document_id": str(model.id)},
        )
        return _to_document(model)

    async def save_passages(self, records: Sequence[PassageCreate]) -> list[Passage]:
        """Insert a batch of passages in one transaction."""
        async with self._session_factory() as session:
            models = [
                await passage_crud.create(
                    session,
                    document_id=record.document_id,
                    content=record.content,
                    chunk_index=record.chunk_index,
                    embedding=record.embedding,
                    metadata_=record.metadata,
                )
                for record in records
            ]
            await session.commit()
        return [_to_passage(model) for model in models]

    async def search_similar(
        self,
        embedding: Sequence[float],
        limit: int,
        threshold: float,
        owner_id: uuid.UUID | None = None,
    ) -> list[SimilarityResult]:
        """
        Cosine-similarity search over stored passages.

        Similarity is clamped to [0, 1]; negative cosine values are never
        above a valid threshold anyway.
        """
        async with self._session_factory() as session:
            rows = await passage_crud.search_similar(
                session,
                embedding,
                limit=limit,
                threshold=threshold,
                owner_id=owner_id,
            )

        return [
            SimilarityResult(
                passage_id=passage.id,
                document_id=passage.document_id,
                document_title=title,
                content=passage.content,
                chunk_index=passage.chunk_index,
                similarity=min(1.0, max(0.0, similarity)),
            )
            for passage, title, similarity in rows
        ]

    async def list_documents(self, owner_id: uuid.UUID, limit: int) -> list[Document]:
        async with self._session_factory() as session:
            models = await document_crud.get_by_owner_id(session, owner_id, limit=limit)
        return [_to_document(model) for model in models]

    async def delete_document(
        self,
        document_id: uuid.UUID,
        owner_id: uuid.UUID,
    ) -> Document | None:
        async with self._session_factory() as session:
            model = await document_crud.delete_owned(session, document_id, owner_id)
            if model is None:
                return None
            await session.commit()

        logger.info(
            f"{__name__}:delete_document - Deleted document and passages",
            extra={"document_id": str(document_id)},
        )
        return _to_document(model)
