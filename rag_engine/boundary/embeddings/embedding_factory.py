"""
Embedding model factory.

Builds the LangChain Embeddings model named by EMBEDDING_PROVIDER and wraps
it in an EmbeddingClient.

Dependencies: langchain_openai, langchain_google_genai, langchain_aws, rag_engine.configs
System role: Embedding provider instantiation and selection
"""

import logging

from langchain_aws import BedrockEmbeddings
from langchain_core.embeddings import Embeddings
from langchain_openai import OpenAIEmbeddings

from rag_engine.boundary.embeddings.embedding_client import EmbeddingClient
from rag_engine.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings
from rag_engine.configs import get_settings
from rag_engine.configs.embedding import EmbeddingSettings

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "google", "bedrock")


def create_embeddings(settings: EmbeddingSettings | None = None) -> Embeddings:
    """
    Create the configured LangChain embeddings model.

    Args:
        settings: Embedding settings (application settings if None)

    Returns:
        Embeddings: OpenAIEmbeddings, FixedDimensionEmbeddings or BedrockEmbeddings

    Raises:
        ValueError: If EMBEDDING_PROVIDER is not supported
    """
    settings = settings or get_settings().embedding
    provider = settings.provider.lower()

    logger.info(
        f"{__name__}:create_embeddings - Creating embeddings",
        extra={"provider": provider, "model": settings.model},
    )

    if provider == "openai":
        kwargs = {"model": settings.model}
        # Only the text-embedding-3 family accepts a dimensions override
        if settings.model.startswith("text-embedding-3"):
            kwargs["dimensions"] = settings.dimension
        if settings.api_key:
            kwargs["api_key"] = settings.api_key
        return OpenAIEmbeddings(**kwargs)

    elif provider == "google":
        kwargs = {}
        if settings.api_key:
            kwargs["google_api_key"] = settings.api_key
        return FixedDimensionEmbeddings(
            model=settings.model,
            output_dimensionality=settings.dimension,
            **kwargs,
        )

    elif provider == "bedrock":
        return BedrockEmbeddings(
            model_id=settings.model,
            region_name=settings.aws_region,
        )

    else:
        raise ValueError(
            f"Invalid EMBEDDING_PROVIDER: {provider}. "
            f"Must be one of {', '.join(SUPPORTED_PROVIDERS)}."
        )


def create_embedder(settings: EmbeddingSettings | None = None) -> EmbeddingClient:
    """Create an EmbeddingClient over the configured provider."""
    settings = settings or get_settings().embedding
    return EmbeddingClient(create_embeddings(settings), model_name=settings.model)
