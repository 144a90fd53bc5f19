"""
Retrieval domain models and schemas.

Similarity results are computed per query and never persisted.

Dependencies: pydantic
System role: Retrieval data structures and search API contracts
"""

import uuid

from pydantic import BaseModel, Field


class SimilarityResult(BaseModel):
    """Single passage returned by similarity search."""

    passage_id: uuid.UUID = Field(description="Matched passage ID")
    document_id: uuid.UUID = Field(description="Owning document ID")
    document_title: str = Field(description="Document title, denormalized for display")
    content: str = Field(description="Passage text")
    chunk_index: int = Field(description="Passage position within its document")
    similarity: float = Field(description="Similarity score (0.0-1.0)")
    rank: int = Field(default=0, description="1-based rank after ordering (0 until ranked)")


class SearchRequest(BaseModel):
    """Request schema for passage search."""

    query: str = Field(min_length=1, description="Search query text")
    limit: int = Field(default=5, ge=1, le=100, description="Maximum passages to return")
    threshold: float = Field(default=0.3, ge=0.0, le=1.0, description="Minimum similarity")


class SearchResponse(BaseModel):
    """Search response with ranked passages."""

    results: list[SimilarityResult]
