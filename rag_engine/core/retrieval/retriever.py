"""
Similarity retrieval with threshold filtering.

Embeds the query with the ingestion-time embedder, searches the passage store
within the owner's scope, and returns a deterministic ranking.

Dependencies: rag_engine.boundary, rag_engine.core.exceptions
System role: RAG retrieval business logic
"""

import logging
import uuid

from rag_engine.boundary.embeddings.embedding_client import Embedder
from rag_engine.boundary.vdb.passage_store import PassageStore
from rag_engine.core.exceptions import (
    InvalidContentError,
    RagEngineException,
    RetrievalUnavailableError,
)
from rag_engine.models.retrieval import SimilarityResult
from rag_engine.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
DEFAULT_THRESHOLD = 0.3


class SimilarityRetriever:
    """Retrieval business logic."""

    def __init__(self, embedder: Embedder, store: PassageStore) -> None:
        """Initialize retriever with the embedding client and passage store."""
        self._embedder = embedder
        self._store = store

    async def retrieve(
        self,
        query: str,
        owner_id: uuid.UUID | None = None,
        limit: int = DEFAULT_LIMIT,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> list[SimilarityResult]:
        """
        Retrieve passages relevant to a query.

        An empty list means nothing cleared the threshold; it is not an error.

        Args:
            query: Query text
            owner_id: Restrict to this owner's documents (unrestricted if None)
            limit: Maximum number of passages
            threshold: Minimum similarity score

        Returns:
            list[SimilarityResult]: Ranked passages, best first

        Raises:
            InvalidContentError: Query is blank
            EmbeddingServiceError: Query embedding failed
            RetrievalUnavailableError: Passage store search failed
        """
        if not query or not query.strip():
            raise InvalidContentError("Query is required", field="query")
        if limit <= 0:
            return []

        embedding = await self._embedder.embed(query)

        try:
            candidates = await self._store.search_similar(
                embedding,
                limit=limit,
                threshold=threshold,
                owner_id=owner_id,
            )
        except RagEngineException:
            raise
        except Exception as e:
            log_exception_with_context(
                logger,
                "Similarity search failed",
                e,
                owner_id=str(owner_id) if owner_id else None,
                vector=embedding,
            )
            raise RetrievalUnavailableError(
                f"Similarity search failed: {e}",
                owner_id=str(owner_id) if owner_id else None,
            ) from e

        ranked = self.rank_results(candidates, threshold, limit)
        logger.info(
            "Retrieved passages",
            extra={
                "owner_id": str(owner_id) if owner_id else None,
                "candidate_count": len(candidates),
                "result_count": len(ranked),
                "threshold": threshold,
            },
        )
        return ranked

    @staticmethod
    def rank_results(
        results: list[SimilarityResult],
        threshold: float,
        limit: int,
    ) -> list[SimilarityResult]:
        """
        Filter, order and truncate search results.

        Ordering is similarity descending, then passage index ascending; the
        sort is stable so store order settles any remaining tie.

        Returns:
            list[SimilarityResult]: Copies of the kept results with rank set
        """
        kept = [r for r in results if r.similarity >= threshold]
        kept.sort(key=lambda r: (-r.similarity, r.chunk_index))
        return [
            r.model_copy(update={"rank": position})
            for position, r in enumerate(kept[:limit], start=1)
        ]
