"""
Sentence-aware text chunker with overlap.

Splits raw text into overlapping character windows, preferring to end a
window at the last sentence terminator or newline when that keeps the chunk
longer than half the target size.

Dependencies: rag_engine.core.resource_governor
System role: First stage of raw-text ingestion
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from rag_engine.core.resource_governor import ResourceGovernor

logger = logging.getLogger(__name__)

BREAK_CHARACTERS = (".", "?", "!", "\n")
DEFAULT_CHUNK_SIZE = 1000
DEFAULT_OVERLAP = 200
TEXT_CHUNK_SIZE = 500
TEXT_CHUNK_OVERLAP = 100
CHECKPOINT_EVERY = 25


def _validate(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError(
            f"overlap must satisfy 0 <= overlap < chunk_size, got {overlap} (chunk_size={chunk_size})"
        )


def _break_point(window: str) -> int:
    """Index of the rightmost sentence terminator or newline, -1 if none."""
    return max(window.rfind(char) for char in BREAK_CHARACTERS)


def iter_chunks(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> Iterator[str]:
    """
    Yield trimmed, non-empty chunks of text in source order.

    Each step takes the window [cursor, cursor + chunk_size). If the window
    stops short of the end of the text and its last break character lies past
    the window midpoint, the window is cut just after that character. The
    next window starts `overlap` characters before the end of the consumed
    window, always advancing at least one character. Chunking stops once a
    window reaches the end of the text.

    Args:
        text: Source text
        chunk_size: Target window size in characters
        overlap: Characters shared by consecutive windows

    Yields:
        str: Chunk text with surrounding whitespace removed

    Raises:
        ValueError: When chunk_size/overlap are out of range
    """
    _validate(chunk_size, overlap)

    length = len(text)
    cursor = 0
    while cursor < length:
        end = min(cursor + chunk_size, length)
        window = text[cursor:end]

        if end < length:
            break_at = _break_point(window)
            if break_at > chunk_size * 0.5:
                window = window[: break_at + 1]

        chunk = window.strip()
        if chunk:
            yield chunk

        if cursor + len(window) >= length:
            break
        cursor += max(1, len(window) - overlap)


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[str]:
    """Chunk text into a list (see iter_chunks)."""
    return list(iter_chunks(text, chunk_size, overlap))


class TextChunker:
    """Chunker bound to a size/overlap pair, with optional pressure checkpoints."""

    def __init__(
        self,
        chunk_size: int = TEXT_CHUNK_SIZE,
        overlap: int = TEXT_CHUNK_OVERLAP,
        governor: ResourceGovernor | None = None,
    ) -> None:
        """
        Initialize chunker.

        Args:
            chunk_size: Target window size in characters
            overlap: Characters shared by consecutive windows
            governor: Resource governor consulted every 25 chunks

        Raises:
            ValueError: When chunk_size/overlap are out of range
        """
        _validate(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap
        self._governor = governor

    def chunk(self, text: str) -> list[str]:
        """Chunk text synchronously."""
        return chunk_text(text, self.chunk_size, self.overlap)

    async def achunk(self, text: str) -> list[str]:
        """
        Chunk text, yielding to the governor every CHECKPOINT_EVERY chunks.

        Args:
            text: Source text

        Returns:
            list[str]: Ordered chunks
        """
        chunks: list[str] = []
        for chunk in iter_chunks(text, self.chunk_size, self.overlap):
            chunks.append(chunk)
            if self._governor is not None:
                await self._governor.checkpoint(len(chunks), every=CHECKPOINT_EVERY)

        logger.info(
            "Chunking completed",
            extra={"text_length": len(text), "chunk_count": len(chunks)},
        )
        return chunks
