"""
Citation extraction and numbering.

Exports: process_citations, render_answer, render_source_list, CITATION_PATTERN
"""

from .citation_processor import (
    CITATION_PATTERN,
    process_citations,
    render_answer,
    render_source_list,
)

__all__ = [
    "CITATION_PATTERN",
    "process_citations",
    "render_answer",
    "render_source_list",
]
