"""
Embedding service client.

Adapts any LangChain Embeddings implementation to the single-text async call
used by ingestion and retrieval, converting provider failures into
EmbeddingServiceError.

Dependencies: langchain_core
System role: Embedding service boundary
"""

import logging
from typing import Protocol, Sequence

from langchain_core.embeddings import Embeddings

from rag_engine.core.exceptions import EmbeddingServiceError

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    """Anything that turns one text into one vector."""

    async def embed(self, text: str) -> Sequence[float]:
        ...


class EmbeddingClient:
    """Async single-text embedding over a LangChain Embeddings model."""

    def __init__(self, embeddings: Embeddings, model_name: str = "") -> None:
        """
        Initialize client.

        Args:
            embeddings: LangChain embeddings model (OpenAI, Gemini, Bedrock, fake)
            model_name: Model identifier for log context
        """
        self._embeddings = embeddings
        self.model_name = model_name

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Passage or query text

        Returns:
            list[float]: Embedding vector exactly as returned by the provider

        Raises:
            EmbeddingServiceError: When the provider call fails
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            logger.exception(
                "Embedding request failed",
                extra={"model": self.model_name, "text_length": len(text), "error": str(e)},
            )
            raise EmbeddingServiceError(
                f"Failed to generate embedding: {e}",
                details={"model": self.model_name},
            ) from e
        return list(vector) if vector is not None else []
