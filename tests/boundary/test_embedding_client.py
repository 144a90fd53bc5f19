"""
Test suite for EmbeddingClient and embedding provider selection.

System role: Verification of the embedding service boundary
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from rag_engine.boundary.embeddings.embedding_client import EmbeddingClient
from rag_engine.boundary.embeddings.embedding_factory import (
    create_embedder,
    create_embeddings,
)
from rag_engine.configs.embedding import EmbeddingSettings
from rag_engine.core.exceptions import EmbeddingServiceError

FACTORY = "rag_engine.boundary.embeddings.embedding_factory"


class TestEmbeddingClient:
    """Test suite for EmbeddingClient.embed()."""

    @pytest.mark.asyncio
    async def test_should_return_provider_vector_as_list(self) -> None:
        # Arrange
        embeddings = MagicMock()
        embeddings.aembed_query = AsyncMock(return_value=(0.1, 0.2, 0.3))
        client = EmbeddingClient(embeddings, model_name="test-model")

        # Act
        vector = await client.embed("hello")

        # Assert
        assert vector == [0.1, 0.2, 0.3]
        embeddings.aembed_query.assert_awaited_once_with("hello")

    @pytest.mark.asyncio
    async def test_provider_failure_should_raise_embedding_service_error(self) -> None:
        # Arrange
        embeddings = MagicMock()
        embeddings.aembed_query = AsyncMock(side_effect=RuntimeError("429 Too Many Requests"))
        client = EmbeddingClient(embeddings, model_name="test-model")

        # Act
        with pytest.raises(EmbeddingServiceError) as exc_info:
            await client.embed("hello")

        # Assert
        assert "429" in exc_info.value.message
        assert exc_info.value.details["model"] == "test-model"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_none_vector_should_become_empty_list(self) -> None:
        embeddings = MagicMock()
        embeddings.aembed_query = AsyncMock(return_value=None)

        assert await EmbeddingClient(embeddings).embed("x") == []


class TestCreateEmbeddings:
    """Test suite for create_embeddings() provider selection."""

    def test_openai_should_pin_dimensions_for_v3_models(self) -> None:
        settings = EmbeddingSettings(provider="openai", model="text-embedding-3-small", api_key="k")

        with patch(f"{FACTORY}.OpenAIEmbeddings") as mock_openai:
            create_embeddings(settings)

        mock_openai.assert_called_once_with(
            model="text-embedding-3-small", dimensions=1536, api_key="k"
        )

    def test_openai_legacy_model_should_not_pass_dimensions(self) -> None:
        settings = EmbeddingSettings(provider="openai", model="text-embedding-ada-002", api_key=None)

        with patch(f"{FACTORY}.OpenAIEmbeddings") as mock_openai:
            create_embeddings(settings)

        mock_openai.assert_called_once_with(model="text-embedding-ada-002")

    def test_google_should_use_fixed_dimension_wrapper(self) -> None:
        settings = EmbeddingSettings(
            provider="google", model="models/gemini-embedding-001", dimension=1536, api_key=None
        )

        with patch(f"{FACTORY}.FixedDimensionEmbeddings") as mock_google:
            create_embeddings(settings)

        mock_google.assert_called_once_with(
            model="models/gemini-embedding-001", output_dimensionality=1536
        )

    def test_bedrock_should_use_region(self) -> None:
        settings = EmbeddingSettings(
            provider="Bedrock", model="amazon.titan-embed-text-v2:0", aws_region="eu-west-1"
        )

        with patch(f"{FACTORY}.BedrockEmbeddings") as mock_bedrock:
            create_embeddings(settings)

        mock_bedrock.assert_called_once_with(
            model_id="amazon.titan-embed-text-v2:0", region_name="eu-west-1"
        )

    def test_unknown_provider_should_raise_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid EMBEDDING_PROVIDER"):
            create_embeddings(EmbeddingSettings(provider="cohere"))

    def test_create_embedder_should_wrap_model_in_client(self) -> None:
        settings = EmbeddingSettings(provider="openai", model="text-embedding-3-small")

        with patch(f"{FACTORY}.OpenAIEmbeddings") as mock_openai:
            embedder = create_embedder(settings)

        assert isinstance(embedder, EmbeddingClient)
        assert embedder.model_name == "text-embedding-3-small"
        mock_openai.assert_called_once()
