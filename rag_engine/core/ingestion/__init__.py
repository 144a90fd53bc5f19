"""
Document ingestion: batched embedding and persistence.

Exports: BatchIngestionPipeline
"""

from .pipeline import BatchIngestionPipeline

__all__ = ["BatchIngestionPipeline"]
