"""
PDF extraction result models.

Dependencies: pydantic
System role: Contract between the PDF extractor and document ingestion
"""

from pydantic import BaseModel, Field


class ExtractedChunk(BaseModel):
    """Passage produced by page-level splitting of a PDF."""

    content: str = Field(description="Chunk text")
    token_count: int = Field(ge=0, description="cl100k_base token count")
    page_number: int = Field(ge=1, description="1-based source page")


class ExtractionResult(BaseModel):
    """Full output of PDF extraction."""

    text: str = Field(description="Joined page text")
    pages: list[str] = Field(default_factory=list, description="Per-page text in order")
    chunks: list[ExtractedChunk] = Field(default_factory=list, description="Ordered chunks")
    page_count: int = Field(ge=0, description="Number of pages")
