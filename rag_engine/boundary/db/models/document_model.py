"""
Document ORM model.

Represents an ingested document with its cleaned text and opaque metadata.

Dependencies: sqlalchemy, rag_engine.boundary.db.base
System role: Document persistence
"""

from typing import Any
import uuid

from sqlalchemy import JSON, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rag_engine.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Created once per ingestion request. Only metadata is ever updated;
    deleting a document cascades to its passages.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Cleaned document title
        content: Full cleaned text
        source: Optional source label (filename, URL; 255 char limit)
        metadata_: Opaque key-value metadata (column "metadata")
        owner_id: Owning user identity
        created_at: Ingestion timestamp (UTC)
        updated_at: Last metadata change (UTC)

    Relationships:
        passages: Child PassageModels (cascade delete-orphan)
    """

    __tablename__ = "rag_documents"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    source: Mapped[str | None] = mapped_column(String(255), nullable=True)
    metadata_: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSON,
        nullable=True,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)

    passages = relationship(
        "PassageModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (Index("idx_rag_documents_owner", "owner_id"),)
