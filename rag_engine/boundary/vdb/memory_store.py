"""
In-memory passage store for development and tests.

Keeps documents and passages in process dictionaries and scores passages
with numpy cosine similarity. Orders like the pgvector store: similarity
descending, then chunk index. Remaining ties keep insertion order.

Dependencies: numpy, rag_engine.models
System role: Development passage store (local runs and test suites)
"""

import asyncio
from datetime import datetime, timezone
from typing import Sequence
import uuid

import numpy as np

from rag_engine.models.document import Document, DocumentCreate
from rag_engine.models.passage import Passage, PassageCreate
from rag_engine.models.retrieval import SimilarityResult


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity clamped to [0, 1].

    Returns 0.0 when either vector has zero norm or the lengths differ.
    """
    left = np.asarray(a, dtype=float)
    right = np.asarray(b, dtype=float)
    if left.shape != right.shape:
        return 0.0
    denom = float(np.linalg.norm(left) * np.linalg.norm(right))
    if denom == 0.0:
        return 0.0
    return float(np.clip(np.dot(left, right) / denom, 0.0, 1.0))


class InMemoryPassageStore:
    """
    PassageStore held entirely in memory.

    Attributes:
        documents: Documents by ID, in insertion order
        passages: Passages by ID, in insertion order
    """

    def __init__(self) -> None:
        self.documents: dict[uuid.UUID, Document] = {}
        self.passages: dict[uuid.UUID, Passage] = {}
        self._lock = asyncio.Lock()

    async def save_document(self, record: DocumentCreate) -> Document:
        now = datetime.now(timezone.utc)
        document = Document(
            id=uuid.uuid4(),
            created_at=now,
            updated_at=now,
            **record.model_dump(),
        )
        async with self._lock:
            self.documents[document.id] = document
        return document

    async def save_passages(self, records: Sequence[PassageCreate]) -> list[Passage]:
        now = datetime.now(timezone.utc)
        passages = [
            Passage(id=uuid.uuid4(), created_at=now, **record.model_dump())
            for record in records
        ]
        async with self._lock:
            for record in records:
                if record.document_id not in self.documents:
                    raise KeyError(f"Unknown document: {record.document_id}")
            for passage in passages:
                self.passages[passage.id] = passage
        return passages

    async def search_similar(
        self,
        embedding: Sequence[float],
        limit: int,
        threshold: float,
        owner_id: uuid.UUID | None = None,
    ) -> list[SimilarityResult]:
        scored = []
        for order, passage in enumerate(self.passages.values()):
            document = self.documents[passage.document_id]
            if owner_id is not None and document.owner_id != owner_id:
                continue
            similarity = cosine_similarity(embedding, passage.embedding)
            if similarity < threshold:
                continue
            scored.append((similarity, passage.chunk_index, order, passage, document))

        scored.sort(key=lambda item: (-item[0], item[1], item[2]))
        return [
            SimilarityResult(
                passage_id=passage.id,
                document_id=document.id,
                document_title=document.title,
                content=passage.content,
                chunk_index=passage.chunk_index,
                similarity=similarity,
            )
            for similarity, _, _, passage, document in scored[:limit]
        ]

    async def list_documents(self, owner_id: uuid.UUID, limit: int) -> list[Document]:
        owned = [doc for doc in self.documents.values() if doc.owner_id == owner_id]
        # Newest first; insertion order breaks timestamp ties
        owned = list(reversed(owned))
        owned.sort(key=lambda doc: doc.created_at, reverse=True)
        return owned[:limit]

    async def delete_document(
        self,
        document_id: uuid.UUID,
        owner_id: uuid.UUID,
    ) -> Document | None:
        async with self._lock:
            document = self.documents.get(document_id)
            if document is None or document.owner_id != owner_id:
                return None
            del self.documents[document_id]
            self.passages = {
                pid: passage
                for pid, passage in self.passages.items()
                if passage.document_id != document_id
            }
        return document

    def passages_for(self, document_id: uuid.UUID) -> list[Passage]:
        """Passages of a document in index order."""
        return sorted(
            (p for p in self.passages.values() if p.document_id == document_id),
            key=lambda p: p.chunk_index,
        )
