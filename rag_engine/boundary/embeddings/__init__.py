"""
Embedding service boundary.

Exports:
  - Embedder: Single-text async embedding protocol
  - EmbeddingClient: Adapter over LangChain Embeddings
  - create_embeddings(), create_embedder(): Provider selection

Dependencies: langchain_core, langchain_openai, langchain_google_genai, langchain_aws
System role: Embedding provider adapter
"""

from rag_engine.boundary.embeddings.embedding_client import Embedder, EmbeddingClient
from rag_engine.boundary.embeddings.embedding_factory import (
    SUPPORTED_PROVIDERS,
    create_embedder,
    create_embeddings,
)

__all__ = [
    "Embedder",
    "EmbeddingClient",
    "SUPPORTED_PROVIDERS",
    "create_embedder",
    "create_embeddings",
]
