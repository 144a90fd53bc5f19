"""
Document domain models and schemas.

Domain record for an ingested document plus request/response schemas for
document operations.

Dependencies: pydantic
System role: Document API contracts
"""

from datetime import datetime
from typing import Any
import uuid

from pydantic import BaseModel, Field


class DocumentCreate(BaseModel):
    """Sanitized document fields handed to the passage store."""

    title: str = Field(description="Cleaned document title")
    content: str = Field(description="Full cleaned document text")
    source: str | None = Field(default=None, description="Optional source label (filename, URL)")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Opaque caller metadata")
    owner_id: uuid.UUID = Field(description="Owning user identity")


class Document(BaseModel):
    """Persisted document record."""

    id: uuid.UUID
    title: str
    content: str
    source: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class IngestTextRequest(BaseModel):
    """Request schema for ingesting raw text."""

    title: str = Field(min_length=1, description="Document title")
    content: str = Field(description="Raw document text")
    source: str | None = Field(default=None, description="Optional source label")
    metadata: dict[str, Any] | None = Field(default=None, description="Opaque metadata")


class DocumentResponse(BaseModel):
    """Response schema for document operations (content omitted)."""

    id: uuid.UUID
    title: str
    source: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, document: Document) -> "DocumentResponse":
        """Build response from a domain document."""
        return cls(
            id=document.id,
            title=document.title,
            source=document.source,
            metadata=document.metadata,
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


class DocumentListResponse(BaseModel):
    """Document list response."""

    documents: list[DocumentResponse]
    total: int
