"""
Passage domain model.

Represents an embedded span of a document's text. Passages are created in
batches during ingestion, never mutated, and removed only by cascade when
their document is deleted.

Dependencies: pydantic
System role: Passage data structure
"""

from datetime import datetime
from typing import Any
import uuid

from pydantic import BaseModel, Field


class PassageCreate(BaseModel):
    """Passage fields handed to the passage store."""

    document_id: uuid.UUID = Field(description="Owning document ID")
    content: str = Field(description="Sanitized passage text")
    chunk_index: int = Field(ge=0, description="Zero-based position within the document")
    embedding: list[float] = Field(description="Embedding vector")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Caller metadata plus reserved chunkLength",
    )


class Passage(PassageCreate):
    """Persisted passage record."""

    id: uuid.UUID
    created_at: datetime
