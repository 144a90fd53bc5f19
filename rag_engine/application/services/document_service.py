"""
Document service orchestrator.

Coordinates raw-text and PDF ingestion, listing and deletion. Upload limits
(type, size, minimum text) are enforced here, before any persistence, and
the resource governor is consulted before extraction starts.

Dependencies: rag_engine.core, rag_engine.boundary, rag_engine.configs
System role: Document management orchestration
"""

import asyncio
from datetime import datetime, timezone
import logging
import re
from typing import Any
import uuid

from rag_engine.boundary.pdf.pdf_extractor import PdfExtractor
from rag_engine.boundary.vdb.passage_store import PassageStore
from rag_engine.configs.ingestion import IngestionSettings
from rag_engine.core.exceptions import (
    DocumentNotFoundError,
    IngestionTimeoutError,
    RagEngineException,
    UploadRejectedError,
)
from rag_engine.core.ingestion.pipeline import BatchIngestionPipeline
from rag_engine.core.resource_governor import ResourceGovernor
from rag_engine.core.text_processing.chunker import TextChunker
from rag_engine.models.document import Document

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
DEFAULT_LIST_LIMIT = 50

_PDF_SUFFIX = re.compile(r"\.pdf$", re.IGNORECASE)


def title_from_filename(filename: str) -> str:
    """Strip a trailing .pdf extension; falls back to 'Untitled'."""
    title = _PDF_SUFFIX.sub("", filename or "").strip()
    return title or "Untitled"


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle: ingestion (text and PDF), listing, deletion.
    """

    def __init__(
        self,
        pipeline: BatchIngestionPipeline,
        store: PassageStore,
        extractor: PdfExtractor,
        governor: ResourceGovernor,
        settings: IngestionSettings | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            pipeline: Batch ingestion pipeline
            store: Passage store for listing and deletion
            extractor: PDF extractor
            governor: Resource governor for admission and chunking checkpoints
            settings: Ingestion settings (defaults if None)
        """
        self.settings = settings or IngestionSettings()
        self._pipeline = pipeline
        self._store = store
        self._extractor = extractor
        self._governor = governor
        self._chunker = TextChunker(
            chunk_size=self.settings.text_chunk_size,
            overlap=self.settings.text_chunk_overlap,
            governor=governor,
        )

    async def ingest_text(
        self,
        title: str,
        content: str,
        owner_id: uuid.UUID,
        source: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Document:
        """
        Chunk and ingest raw text.

        Args:
            title: Document title
            content: Raw document text
            owner_id: Owning user identity
            source: Optional source label
            metadata: Opaque caller metadata

        Returns:
            Document: Persisted document

        Raises:
            ResourceExhaustedError: Memory pressure is critical
            InvalidContentError: Empty title or content
            EmbeddingServiceError / EmbeddingValidationError: Batch failure
        """
        self._governor.ensure_capacity()

        passages = await self._chunker.achunk(content)
        return await self._ingest(
            title=title,
            content=content,
            passages=passages,
            owner_id=owner_id,
            source=source,
            metadata=metadata,
        )

    async def ingest_pdf(
        self,
        filename: str,
        data: bytes,
        owner_id: uuid.UUID,
        content_type: str | None = None,
    ) -> Document:
        """
        Validate, extract and ingest an uploaded PDF.

        Steps:
        1. Reject non-PDF and oversized uploads
        2. Refuse work under critical memory pressure
        3. Extract text and page chunks within the configured timeout
        4. Reject empty or near-empty text
        5. Ingest page chunks with page numbers as passage metadata

        Args:
            filename: Uploaded file name
            data: Raw file bytes
            owner_id: Owning user identity
            content_type: Declared MIME type (extension is checked if None)

        Returns:
            Document: Persisted document

        Raises:
            UploadRejectedError: Wrong type, too large, no text or too little text
            ResourceExhaustedError: Memory pressure is critical
            IngestionTimeoutError: Extraction exceeded the timeout
            ExtractionError: PDF could not be parsed
        """
        self._validate_upload(filename, data, content_type)
        self._governor.ensure_capacity()

        timeout = self.settings.extraction_timeout_seconds
        try:
            extraction = await asyncio.wait_for(self._extractor.extract(data), timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.warning(
                "PDF extraction timed out",
                extra={"upload_filename": filename, "timeout_seconds": timeout},
            )
            raise IngestionTimeoutError(
                "PDF processing timed out",
                details={"timeout_seconds": timeout},
            ) from e

        text = extraction.text.strip()
        if not text:
            raise UploadRejectedError(
                "No text content found in PDF. The PDF might be image-based or corrupted.",
                reason="no_text",
            )
        if len(text) < self.settings.min_text_length:
            raise UploadRejectedError(
                "PDF appears to contain very little text content",
                reason="too_short",
            )

        metadata = {
            "originalFileName": filename,
            "fileSize": len(data),
            "pageCount": extraction.page_count,
            "chunkCount": len(extraction.chunks),
            "parsedAt": datetime.now(timezone.utc).isoformat(),
        }

        return await self._ingest(
            title=title_from_filename(filename),
            content=extraction.text,
            passages=[chunk.content for chunk in extraction.chunks],
            owner_id=owner_id,
            source=filename,
            metadata=metadata,
            passage_metadata=[
                {"pageNumber": chunk.page_number, "tokenCount": chunk.token_count}
                for chunk in extraction.chunks
            ],
        )

    def _validate_upload(self, filename: str, data: bytes, content_type: str | None) -> None:
        if content_type is not None:
            is_pdf = content_type.split(";")[0].strip().lower() == PDF_CONTENT_TYPE
        else:
            is_pdf = bool(_PDF_SUFFIX.search(filename or ""))
        if not is_pdf:
            raise UploadRejectedError("Only PDF files are supported", reason="unsupported_type")

        max_bytes = self.settings.max_upload_bytes
        if len(data) > max_bytes:
            raise UploadRejectedError(
                f"File size must be less than {max_bytes // (1024 * 1024)}MB",
                reason="too_large",
                details={"size_bytes": len(data), "max_bytes": max_bytes},
            )

    async def _ingest(self, **kwargs) -> Document:
        try:
            document = await self._pipeline.ingest(**kwargs)
        except RagEngineException as e:
            document_id = e.details.get("document_id")
            if document_id:
                logger.warning(
                    "Ingestion failed after document was saved; earlier batches remain",
                    extra={"document_id": document_id, "error": e.message},
                )
            raise

        logger.info(
            "Document ingested",
            extra={"document_id": str(document.id), "owner_id": str(document.owner_id)},
        )
        return document

    async def list_documents(
        self,
        owner_id: uuid.UUID,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[Document]:
        """List an owner's documents, newest first."""
        return await self._store.list_documents(owner_id, limit)

    async def delete_document(self, document_id: uuid.UUID, owner_id: uuid.UUID) -> Document:
        """
        Delete a document and its passages.

        Raises:
            DocumentNotFoundError: Document absent or owned by someone else
        """
        document = await self._store.delete_document(document_id, owner_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return document
