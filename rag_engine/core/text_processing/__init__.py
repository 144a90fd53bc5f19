"""
Text processing: chunking and sanitization.

Exports: TextChunker, chunk_text, iter_chunks, clean_text, clean_passage
"""

from .chunker import TextChunker, chunk_text, iter_chunks
from .sanitizer import clean_passage, clean_text, strip_control_characters

__all__ = [
    "TextChunker",
    "chunk_text",
    "iter_chunks",
    "clean_text",
    "clean_passage",
    "strip_control_characters",
]
