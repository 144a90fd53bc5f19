"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(embedder, passage store, governor, pipeline, extractor) are built once and
cached; tests replace them through app.dependency_overrides.

Dependencies: rag_engine.configs, rag_engine.application, rag_engine.boundary
System role: DI container for service injection
"""

import uuid

from fastapi import Depends, Header, HTTPException

from rag_engine.application.services import DocumentService, RetrievalService
from rag_engine.configs import get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._governor = None
        self._embedder = None
        self._passage_store = None
        self._pipeline = None
        self._pdf_extractor = None
        self._document_service = None
        self._retrieval_service = None

    @property
    def governor(self):
        """Get cached resource governor."""
        if self._governor is None:
            from rag_engine.core.resource_governor import (
                ResourceGovernor,
                process_memory_probe,
            )

            ingestion = get_settings().ingestion
            self._governor = ResourceGovernor(
                memory_probe=process_memory_probe(ingestion.memory_limit_bytes),
                elevated_ratio=ingestion.elevated_pressure_ratio,
                critical_ratio=ingestion.critical_pressure_ratio,
            )
        return self._governor

    @property
    def embedder(self):
        """Get cached embedding client."""
        if self._embedder is None:
            from rag_engine.boundary.embeddings import create_embedder

            self._embedder = create_embedder()
        return self._embedder

    @property
    def passage_store(self):
        """Get cached passage store."""
        if self._passage_store is None:
            from rag_engine.boundary.vdb import create_passage_store

            self._passage_store = create_passage_store()
        return self._passage_store

    @property
    def pipeline(self):
        """Get cached batch ingestion pipeline."""
        if self._pipeline is None:
            from rag_engine.core.ingestion import BatchIngestionPipeline

            settings = get_settings()
            self._pipeline = BatchIngestionPipeline(
                embedder=self.embedder,
                store=self.passage_store,
                governor=self.governor,
                batch_size=settings.ingestion.batch_size,
                expected_dimension=settings.embedding.dimension,
            )
        return self._pipeline

    @property
    def pdf_extractor(self):
        """Get cached PDF extractor."""
        if self._pdf_extractor is None:
            from rag_engine.boundary.pdf import PdfExtractor

            ingestion = get_settings().ingestion
            self._pdf_extractor = PdfExtractor(
                governor=self.governor,
                chunk_size=ingestion.pdf_chunk_size,
                chunk_overlap=ingestion.pdf_chunk_overlap,
            )
        return self._pdf_extractor

    @property
    def document_service(self) -> DocumentService:
        """Get cached document service."""
        if self._document_service is None:
            self._document_service = DocumentService(
                pipeline=self.pipeline,
                store=self.passage_store,
                extractor=self.pdf_extractor,
                governor=self.governor,
                settings=get_settings().ingestion,
            )
        return self._document_service

    @property
    def retrieval_service(self) -> RetrievalService:
        """Get cached retrieval service."""
        if self._retrieval_service is None:
            from rag_engine.core.retrieval import SimilarityRetriever

            self._retrieval_service = RetrievalService(
                retriever=SimilarityRetriever(self.embedder, self.passage_store),
                settings=get_settings().retrieval,
            )
        return self._retrieval_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._governor = None
        self._embedder = None
        self._passage_store = None
        self._pipeline = None
        self._pdf_extractor = None
        self._document_service = None
        self._retrieval_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_owner_id(x_owner_id: str | None = Header(default=None)) -> uuid.UUID:
    """
    Resolve the calling owner from the X-Owner-Id header.

    Raises:
        HTTPException(401): Header missing
        HTTPException(400): Header is not a UUID
    """
    if not x_owner_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return uuid.UUID(x_owner_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="X-Owner-Id must be a UUID")


def get_document_service(
    cache: ServiceCache = Depends(get_service_cache),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        DocumentService: Cached document service
    """
    return cache.document_service


def get_retrieval_service(
    cache: ServiceCache = Depends(get_service_cache),
) -> RetrievalService:
    """
    Get retrieval service instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        RetrievalService: Cached retrieval service
    """
    return cache.retrieval_service
