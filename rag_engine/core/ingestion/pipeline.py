"""
Batch ingestion pipeline.

Persists a document, then embeds and persists its passages in fixed-size
batches. Embedding calls run concurrently within a batch; batches run one
after another so in-flight requests and memory stay bounded by the batch size.

Ingestion is not atomic across batches: when batch k fails, batches before k
remain committed and the error propagates with document_id in its details, so
callers can locate (and delete, if they choose) a partially ingested document.

Dependencies: asyncio, rag_engine.core, rag_engine.boundary.vdb
System role: Embedding + persistence stage of document ingestion
"""

import asyncio
import logging
import math
import time
from typing import Any, Mapping, Sequence
import uuid

from rag_engine.boundary.embeddings.embedding_client import Embedder
from rag_engine.boundary.vdb.passage_store import PassageStore
from rag_engine.core.exceptions import (
    EmbeddingValidationError,
    IngestionError,
    InvalidContentError,
    RagEngineException,
)
from rag_engine.core.resource_governor import ResourceGovernor
from rag_engine.core.text_processing.sanitizer import clean_passage, clean_text
from rag_engine.models.document import Document, DocumentCreate
from rag_engine.models.passage import PassageCreate
from rag_engine.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10
EMBEDDING_DIMENSION = 1536
CHUNK_LENGTH_KEY = "chunkLength"


class BatchIngestionPipeline:
    """Embed and persist document passages in bounded batches."""

    def __init__(
        self,
        embedder: Embedder,
        store: PassageStore,
        governor: ResourceGovernor,
        batch_size: int = DEFAULT_BATCH_SIZE,
        expected_dimension: int = EMBEDDING_DIMENSION,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            embedder: Embedding service client
            store: Passage store for documents and passages
            governor: Resource governor consulted between batches
            batch_size: Passages embedded concurrently per batch
            expected_dimension: Required embedding length

        Raises:
            ValueError: When batch_size or expected_dimension is not positive
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if expected_dimension <= 0:
            raise ValueError("expected_dimension must be positive")

        self._embedder = embedder
        self._store = store
        self._governor = governor
        self.batch_size = batch_size
        self.expected_dimension = expected_dimension

    async def ingest(
        self,
        title: str,
        content: str,
        passages: Sequence[str],
        owner_id: uuid.UUID,
        source: str | None = None,
        metadata: Mapping[str, Any] | None = None,
        passage_metadata: Sequence[Mapping[str, Any]] | None = None,
    ) -> Document:
        """
        Ingest a document and its pre-chunked passages.

        Args:
            title: Document title
            content: Full document text
            passages: Ordered passage texts; index order is storage order
            owner_id: Owning user identity
            source: Optional source label
            metadata: Opaque document metadata, also copied onto each passage
            passage_metadata: Optional per-passage metadata aligned with passages

        Returns:
            Document: Persisted document once every batch has been written

        Raises:
            InvalidContentError: Empty title/content/passages (before persistence)
                or an empty sanitized passage (aborts its batch)
            EmbeddingValidationError: Wrong vector dimensionality (aborts its batch)
            EmbeddingServiceError: Embedding service failure (aborts ingestion)
            IngestionError: Passage store failure (aborts its batch)
        """
        if passage_metadata is not None and len(passage_metadata) != len(passages):
            raise ValueError("passage_metadata must align with passages")

        cleaned_title = clean_text(title)
        cleaned_content = clean_text(content)
        cleaned_source = clean_text(source) if source else None

        if not cleaned_content:
            raise InvalidContentError("Document content is empty after sanitization", field="content")
        if not cleaned_title:
            raise InvalidContentError("Document title is empty after sanitization", field="title")
        if not passages:
            raise InvalidContentError("No passages to ingest", field="passages")

        start_time = time.perf_counter()
        base_metadata = dict(metadata or {})

        document = await self._store.save_document(
            DocumentCreate(
                title=cleaned_title,
                content=cleaned_content,
                source=cleaned_source or None,
                metadata=base_metadata,
                owner_id=owner_id,
            )
        )
        logger.info(
            "Document saved, embedding passages",
            extra={
                "document_id": str(document.id),
                "owner_id": str(owner_id),
                "passage_count": len(passages),
            },
        )

        total_batches = math.ceil(len(passages) / self.batch_size)
        for batch_index, start in enumerate(range(0, len(passages), self.batch_size)):
            batch = passages[start : start + self.batch_size]
            batch_metadata = (
                passage_metadata[start : start + self.batch_size]
                if passage_metadata is not None
                else [{}] * len(batch)
            )

            try:
                records = await self._prepare_batch(
                    document.id, batch, batch_metadata, start, base_metadata
                )
                await self._persist_batch(document.id, records, batch_index)
            except RagEngineException as e:
                e.details.setdefault("document_id", str(document.id))
                e.details["batch_index"] = batch_index
                log_with_context(
                    logger,
                    logging.ERROR,
                    "Passage batch failed, ingestion aborted",
                    document_id=str(document.id),
                    batch_index=batch_index,
                    batches_committed=batch_index,
                    error_type=type(e).__name__,
                    error=e.message,
                )
                raise

            logger.debug(
                "Batch %d/%d stored",
                batch_index + 1,
                total_batches,
                extra={"document_id": str(document.id)},
            )
            await self._governor.relieve()

        logger.info(
            "Document ingestion completed",
            extra={
                "document_id": str(document.id),
                "passage_count": len(passages),
                "batch_count": total_batches,
                "processing_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        return document

    async def _prepare_batch(
        self,
        document_id: uuid.UUID,
        batch: Sequence[str],
        batch_metadata: Sequence[Mapping[str, Any]],
        start_index: int,
        base_metadata: dict[str, Any],
    ) -> list[PassageCreate]:
        """
        Sanitize, embed and validate one batch without writing anything.

        Returns:
            list[PassageCreate]: Records in passage index order
        """
        cleaned: list[str] = []
        for offset, raw in enumerate(batch):
            text = clean_passage(raw or "")
            if not text:
                raise InvalidContentError(
                    f"Invalid chunk content for chunk {start_index + offset + 1}",
                    field="passage",
                    details={"chunk_index": start_index + offset},
                )
            cleaned.append(text)

        vectors = await self._embed_all(cleaned)

        records: list[PassageCreate] = []
        for offset, (text, vector, extra) in enumerate(zip(cleaned, vectors, batch_metadata)):
            chunk_index = start_index + offset
            self._validate_embedding(vector, chunk_index)
            records.append(
                PassageCreate(
                    document_id=document_id,
                    content=text,
                    chunk_index=chunk_index,
                    embedding=[float(value) for value in vector],
                    metadata={**base_metadata, **extra, CHUNK_LENGTH_KEY: len(text)},
                )
            )
        return records

    async def _embed_all(self, texts: Sequence[str]) -> list[Any]:
        """
        Embed texts concurrently, in input order.

        The first failure cancels the remaining requests of the batch and is
        re-raised on its own.
        """
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self._embedder.embed(text)) for text in texts]
        except ExceptionGroup as eg:
            raise eg.exceptions[0] from None
        return [task.result() for task in tasks]

    async def _persist_batch(
        self,
        document_id: uuid.UUID,
        records: Sequence[PassageCreate],
        batch_index: int,
    ) -> None:
        """
        Write one prepared batch in a single store call.

        Raises:
            IngestionError: Store failure; nothing from this batch is written
        """
        try:
            await self._store.save_passages(records)
        except RagEngineException:
            raise
        except Exception as e:
            raise IngestionError(
                "Failed to persist passage batch",
                document_id=str(document_id),
                details={
                    "batch_index": batch_index,
                    "chunk_index": records[0].chunk_index if records else None,
                    "cause": type(e).__name__,
                },
            ) from e

    def _validate_embedding(self, vector: Any, chunk_index: int) -> None:
        """Raise EmbeddingValidationError unless vector has the expected length."""
        actual = len(vector) if isinstance(vector, Sequence) else None
        if actual != self.expected_dimension:
            raise EmbeddingValidationError(
                f"Invalid embedding generated for chunk {chunk_index + 1}",
                expected=self.expected_dimension,
                actual=actual,
                details={"chunk_index": chunk_index},
            )
