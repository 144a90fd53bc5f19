"""
Test suite for SimilarityRetriever.

System role: Verification of threshold filtering, ranking and failure modes
"""

from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest

from rag_engine.core.exceptions import (
    EmbeddingServiceError,
    InvalidContentError,
    RetrievalUnavailableError,
)
from rag_engine.core.retrieval.retriever import SimilarityRetriever
from rag_engine.models.retrieval import SimilarityResult


def make_result(similarity: float, chunk_index: int = 0, title: str = "Doc") -> SimilarityResult:
    return SimilarityResult(
        passage_id=uuid.uuid4(),
        document_id=uuid.uuid4(),
        document_title=title,
        content=f"content {chunk_index}",
        chunk_index=chunk_index,
        similarity=similarity,
    )


@pytest.fixture
def mock_store() -> MagicMock:
    """Provide passage store mock with async search."""
    store = MagicMock()
    store.search_similar = AsyncMock(return_value=[])
    return store


class TestSimilarityRetrieverValidation:
    """Test suite for argument handling."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   "])
    async def test_blank_query_should_raise_invalid_content(
        self, fake_embedder, mock_store, query: str
    ) -> None:
        retriever = SimilarityRetriever(fake_embedder, mock_store)

        with pytest.raises(InvalidContentError):
            await retriever.retrieve(query)

        assert fake_embedder.calls == []

    @pytest.mark.asyncio
    async def test_non_positive_limit_should_return_empty_without_search(
        self, fake_embedder, mock_store
    ) -> None:
        retriever = SimilarityRetriever(fake_embedder, mock_store)

        assert await retriever.retrieve("query", limit=0) == []
        mock_store.search_similar.assert_not_awaited()


class TestSimilarityRetrieverRanking:
    """Test suite for rank_results() and retrieve() ordering."""

    @pytest.mark.asyncio
    async def test_result_below_threshold_should_return_empty_not_error(
        self, fake_embedder, mock_store
    ) -> None:
        # Arrange
        mock_store.search_similar.return_value = [make_result(0.25)]
        retriever = SimilarityRetriever(fake_embedder, mock_store)

        # Act
        results = await retriever.retrieve("query", threshold=0.3)

        # Assert
        assert results == []

    @pytest.mark.asyncio
    async def test_should_pass_owner_scope_and_arguments_to_store(
        self, fake_embedder, mock_store, owner_id
    ) -> None:
        retriever = SimilarityRetriever(fake_embedder, mock_store)

        await retriever.retrieve("what is rag", owner_id=owner_id, limit=3, threshold=0.5)

        mock_store.search_similar.assert_awaited_once()
        args, kwargs = mock_store.search_similar.call_args
        assert args[0] == await fake_embedder.embed("what is rag")
        assert kwargs == {"limit": 3, "threshold": 0.5, "owner_id": owner_id}

    def test_rank_results_should_order_by_similarity_then_chunk_index(self) -> None:
        # Arrange
        results = [
            make_result(0.5, chunk_index=4),
            make_result(0.9, chunk_index=7),
            make_result(0.5, chunk_index=1),
            make_result(0.7, chunk_index=0),
        ]

        # Act
        ranked = SimilarityRetriever.rank_results(results, threshold=0.3, limit=10)

        # Assert
        assert [(r.similarity, r.chunk_index) for r in ranked] == [
            (0.9, 7),
            (0.7, 0),
            (0.5, 1),
            (0.5, 4),
        ]
        assert [r.rank for r in ranked] == [1, 2, 3, 4]

    def test_rank_results_should_truncate_after_filtering(self) -> None:
        results = [make_result(s) for s in (0.2, 0.95, 0.31, 0.3, 0.6)]

        ranked = SimilarityRetriever.rank_results(results, threshold=0.3, limit=2)

        assert [r.similarity for r in ranked] == [0.95, 0.6]

    def test_threshold_should_be_inclusive(self) -> None:
        ranked = SimilarityRetriever.rank_results([make_result(0.3)], threshold=0.3, limit=5)

        assert len(ranked) == 1

    def test_rank_results_should_not_mutate_inputs(self) -> None:
        original = make_result(0.8)

        SimilarityRetriever.rank_results([original], threshold=0.3, limit=5)

        assert original.rank == 0

    @pytest.mark.asyncio
    async def test_retrieval_should_be_deterministic_for_fixed_store(
        self, fake_embedder, memory_store, pipeline, owner_id
    ) -> None:
        # Arrange
        await pipeline.ingest(
            "Doc", "Text", [f"passage {i}" for i in range(12)], owner_id
        )
        retriever = SimilarityRetriever(fake_embedder, memory_store)

        # Act
        first = await retriever.retrieve("passage", owner_id=owner_id, limit=5, threshold=0.0)
        second = await retriever.retrieve("passage", owner_id=owner_id, limit=5, threshold=0.0)

        # Assert
        assert [r.passage_id for r in first] == [r.passage_id for r in second]
        assert len(first) == 5


class TestSimilarityRetrieverFailures:
    """Test suite for failure propagation."""

    @pytest.mark.asyncio
    async def test_store_failure_should_raise_retrieval_unavailable(
        self, fake_embedder, mock_store, owner_id
    ) -> None:
        # Arrange
        mock_store.search_similar.side_effect = ConnectionError("db down")
        retriever = SimilarityRetriever(fake_embedder, mock_store)

        # Act
        with pytest.raises(RetrievalUnavailableError) as exc_info:
            await retriever.retrieve("query", owner_id=owner_id)

        # Assert
        assert exc_info.value.details["owner_id"] == str(owner_id)

    @pytest.mark.asyncio
    async def test_embedding_failure_should_propagate(
        self, embedder_factory, mock_store
    ) -> None:
        retriever = SimilarityRetriever(embedder_factory(fail_on={"query"}), mock_store)

        with pytest.raises(EmbeddingServiceError):
            await retriever.retrieve("query")

        mock_store.search_similar.assert_not_awaited()
