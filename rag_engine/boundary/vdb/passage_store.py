"""
Passage store contract.

Structural interface shared by the pgvector store (production) and the
in-memory store (local development and tests). Components receive a
PassageStore at construction instead of reaching for a global client.

Dependencies: rag_engine.models
System role: Persistence boundary for documents, passages and similarity search
"""

from typing import Protocol, Sequence, runtime_checkable
import uuid

from rag_engine.models.document import Document, DocumentCreate
from rag_engine.models.passage import Passage, PassageCreate
from rag_engine.models.retrieval import SimilarityResult


@runtime_checkable
class PassageStore(Protocol):
    """Persistence operations required by ingestion and retrieval."""

    async def save_document(self, record: DocumentCreate) -> Document:
        """Persist a document and return it with identity and timestamps."""
        ...

    async def save_passages(self, records: Sequence[PassageCreate]) -> list[Passage]:
        """Persist a batch of passages; either all are stored or none are."""
        ...

    async def search_similar(
        self,
        embedding: Sequence[float],
        limit: int,
        threshold: float,
        owner_id: uuid.UUID | None = None,
    ) -> list[SimilarityResult]:
        """Return passages with similarity >= threshold, best first, at most limit."""
        ...

    async def list_documents(self, owner_id: uuid.UUID, limit: int) -> list[Document]:
        """Return the owner's documents, newest first."""
        ...

    async def delete_document(
        self,
        document_id: uuid.UUID,
        owner_id: uuid.UUID,
    ) -> Document | None:
        """Delete a document (cascading to passages); None if absent or not owned."""
        ...
