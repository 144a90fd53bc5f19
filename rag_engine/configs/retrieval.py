"""
Retrieval configuration settings.

Manages passage store selection and default similarity search parameters.

Dependencies: pydantic, pydantic_settings
System role: Vector retrieval configuration for RAG grounding
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from rag_engine.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Passage store configuration (in-memory for dev, pgvector for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="pgvector",
        description="Passage store type: 'memory' for local dev, 'pgvector' for production",
    )
    default_limit: int = Field(default=5, description="Number of passages to return")
    default_threshold: float = Field(
        default=0.3,
        description="Minimum similarity score for retrieval (0.0-1.0)",
    )
    context_limit: int = Field(
        default=3,
        description="Passages interpolated into a chat prompt",
    )
