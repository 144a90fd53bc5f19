"""
Embedding service configuration settings.

Selects the embedding provider and pins the vector dimensionality that
ingestion validates against and the passage table is created with.

Dependencies: pydantic, pydantic_settings
System role: Embedding provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from rag_engine.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration (OpenAI by default)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="openai",
        description="Embedding provider: 'openai', 'google' or 'bedrock'",
    )
    model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model ID for the selected provider",
    )
    dimension: int = Field(
        default=1536,
        description="Expected embedding vector dimension",
    )
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region for Bedrock embeddings",
    )
    api_key: str | None = Field(
        default=None,
        description="Provider API key (falls back to the provider's own env var)",
    )
