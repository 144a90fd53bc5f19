"""
Passage ORM model.

Embedded span of a document. The embedding column is a pgvector Vector sized
from EmbeddingSettings.dimension, which must match the configured model.

Dependencies: sqlalchemy, pgvector, rag_engine.boundary.db.base, rag_engine.configs
System role: Passage persistence and vector index
"""

from typing import Any
import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import JSON, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rag_engine.boundary.db.base import Base, CreatedAtMixin, UUIDMixin
from rag_engine.configs import get_settings


class PassageModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Passage ORM model.

    Attributes:
        id: UUID primary key
        document_id: Owning document (ON DELETE CASCADE)
        content: Sanitized passage text
        chunk_index: Zero-based position within the document
        embedding: Embedding vector
        metadata_: Caller metadata plus chunkLength (column "metadata")
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "rag_passages"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("rag_documents.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    embedding = mapped_column(Vector(get_settings().embedding.dimension), nullable=False)
    metadata_: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSON,
        nullable=True,
    )

    document = relationship("DocumentModel", back_populates="passages")

    __table_args__ = (
        Index("idx_rag_passages_document", "document_id", "chunk_index"),
    )
