"""
PDF text extraction with page-level chunking.

Loads a PDF with LangChain's PyPDFLoader, splits each page with
RecursiveCharacterTextSplitter, and counts tokens per chunk with tiktoken.
Parsing runs in a worker thread; splitting yields back to the event loop at
resource-governor checkpoints so large files do not starve other requests.

Dependencies: langchain_community, langchain_text_splitters, pypdf, tiktoken
System role: PDF boundary for document ingestion
"""

import asyncio
import logging
import os
import tempfile
from typing import Callable

from langchain_community.document_loaders import PyPDFLoader
from langchain_text_splitters import RecursiveCharacterTextSplitter
import tiktoken

from rag_engine.core.exceptions import ExtractionError
from rag_engine.core.resource_governor import ResourceGovernor
from rag_engine.models.extraction import ExtractedChunk, ExtractionResult

logger = logging.getLogger(__name__)

TOKEN_ENCODING = "cl100k_base"
CHUNK_CHECKPOINT_EVERY = 2
PAGE_JOIN_BATCH = 5
PAGE_DELAY_SECONDS = 0.1
PAGE_RELIEF_DELAY_SECONDS = 0.2


class PdfExtractor:
    """Extract text, pages and token-counted chunks from PDF bytes."""

    def __init__(
        self,
        governor: ResourceGovernor | None = None,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        token_counter: Callable[[str], int] | None = None,
        page_delay: float = PAGE_DELAY_SECONDS,
    ) -> None:
        """
        Initialize extractor.

        Args:
            governor: Resource governor consulted between pages and chunks
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks on a page
            token_counter: Token counting function (tiktoken cl100k_base if None)
            page_delay: Pause between pages in seconds
        """
        self._governor = governor
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
        )
        self._token_counter = token_counter
        self._page_delay = page_delay

    def count_tokens(self, text: str) -> int:
        if self._token_counter is None:
            encoding = tiktoken.get_encoding(TOKEN_ENCODING)
            self._token_counter = lambda value: len(encoding.encode(value))
        return self._token_counter(text)

    def _load_pages(self, data: bytes) -> list[str]:
        """Parse PDF bytes into per-page text (blocking)."""
        fd, path = tempfile.mkstemp(prefix="rag_engine_", suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            documents = PyPDFLoader(path).load()
        except Exception as e:
            raise ExtractionError(f"Failed to parse PDF: {e}") from e
        finally:
            try:
                os.unlink(path)
            except OSError:
                logger.warning("Could not remove temp file %s", path)
        return [doc.page_content or "" for doc in documents]

    async def extract(self, data: bytes) -> ExtractionResult:
        """
        Extract text and chunks from a PDF.

        Args:
            data: Raw PDF bytes

        Returns:
            ExtractionResult: Joined text, page texts, ordered chunks, page count

        Raises:
            ExtractionError: When the bytes cannot be parsed as a PDF
        """
        if not data:
            raise ExtractionError("Empty PDF payload")

        pages = await asyncio.to_thread(self._load_pages, data)
        logger.info("Parsed PDF", extra={"page_count": len(pages), "size_bytes": len(data)})

        chunks: list[ExtractedChunk] = []
        for page_index, page_text in enumerate(pages):
            if self._governor is not None:
                await self._governor.relieve(delay=PAGE_RELIEF_DELAY_SECONDS)

            for piece in self._splitter.split_text(page_text):
                chunks.append(
                    ExtractedChunk(
                        content=piece,
                        token_count=self.count_tokens(piece),
                        page_number=page_index + 1,
                    )
                )
                if self._governor is not None:
                    await self._governor.checkpoint(len(chunks), every=CHUNK_CHECKPOINT_EVERY)

            if self._page_delay > 0 and page_index < len(pages) - 1:
                await asyncio.sleep(self._page_delay)

        text = await self._join_pages(pages)
        return ExtractionResult(
            text=text,
            pages=pages,
            chunks=chunks,
            page_count=len(pages),
        )

    async def _join_pages(self, pages: list[str]) -> str:
        # Joined in small groups so intermediate strings stay short
        parts = []
        for start in range(0, len(pages), PAGE_JOIN_BATCH):
            parts.append(" ".join(pages[start:start + PAGE_JOIN_BATCH]))
            if self._governor is not None:
                await self._governor.checkpoint(len(parts), every=1, delay=0)
        return " ".join(parts)
