"""
Domain models and API schemas.

Exports: Document, DocumentCreate, Passage, PassageCreate, SimilarityResult,
CitationRecord, CitedAnswer, ExtractedChunk, ExtractionResult
"""

from rag_engine.models.citation import CitationRecord, CitedAnswer
from rag_engine.models.document import Document, DocumentCreate
from rag_engine.models.extraction import ExtractedChunk, ExtractionResult
from rag_engine.models.passage import Passage, PassageCreate
from rag_engine.models.retrieval import SimilarityResult

__all__ = [
    "CitationRecord",
    "CitedAnswer",
    "Document",
    "DocumentCreate",
    "ExtractedChunk",
    "ExtractionResult",
    "Passage",
    "PassageCreate",
    "SimilarityResult",
]
