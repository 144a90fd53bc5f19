"""
Configuration settings for the document ingestion pipeline.

Provides environment-based configuration for chunking, batching, upload
limits and memory-pressure thresholds.

Dependencies: pydantic, pydantic_settings
System role: Centralized ingestion configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from rag_engine.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    batch_size: int = Field(
        default=10,
        description="Passages embedded concurrently per batch",
    )

    # Raw text chunking
    text_chunk_size: int = Field(
        default=500,
        description="Chunk size in characters for raw text ingestion",
    )
    text_chunk_overlap: int = Field(
        default=100,
        description="Overlap between consecutive raw text chunks",
    )

    # PDF chunking
    pdf_chunk_size: int = Field(
        default=1000,
        description="Chunk size in characters for PDF page splitting",
    )
    pdf_chunk_overlap: int = Field(
        default=200,
        description="Overlap between consecutive PDF chunks",
    )

    # Upload limits
    max_upload_bytes: int = Field(
        default=5 * 1024 * 1024,
        description="Maximum accepted PDF size in bytes",
    )
    min_text_length: int = Field(
        default=10,
        description="Minimum extracted text length for a PDF to be accepted",
    )
    extraction_timeout_seconds: float = Field(
        default=30.0,
        description="Wall-clock limit for PDF text extraction",
    )

    # Resource-pressure governor
    memory_limit_bytes: int | None = Field(
        default=None,
        description="Working-set budget for the process (system memory if unset)",
    )
    elevated_pressure_ratio: float = Field(
        default=0.90,
        description="Working-set ratio above which pressure is elevated",
    )
    critical_pressure_ratio: float = Field(
        default=0.95,
        description="Working-set ratio above which pressure is critical",
    )
