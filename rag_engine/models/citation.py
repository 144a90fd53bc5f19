"""
Citation domain models.

Represents numbered source attribution for a rendered answer.

Dependencies: pydantic
System role: Citation data structures
"""

from pydantic import BaseModel, Field


class CitationRecord(BaseModel):
    """A distinct source label and its display number within one answer."""

    label: str = Field(description="Source label exactly as written in the marker")
    index: int = Field(ge=1, description="1-based first-occurrence rank")


class CitedAnswer(BaseModel):
    """Answer text with markers rewritten to numeric references."""

    text: str = Field(description="Text with [Source: ...] markers replaced by [n]")
    sources: list[str] = Field(default_factory=list, description="Distinct labels in display order")

    @property
    def citations(self) -> list[CitationRecord]:
        """Citation records in display order."""
        return [
            CitationRecord(label=label, index=i)
            for i, label in enumerate(self.sources, start=1)
        ]


class RenderCitationsRequest(BaseModel):
    """Request schema for citation rendering."""

    text: str = Field(description="Model output containing citation markers")
