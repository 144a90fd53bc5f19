"""
Citation extraction and numbering.

Rewrites inline [Source: <label>] markers in model output to numeric [n]
references and collects the distinct labels in first-occurrence order.
Labels are compared verbatim (no case folding or trimming beyond the
whitespace that follows "Source:").

Dependencies: re, rag_engine.models
System role: Citation formatting business logic
"""

import re

from rag_engine.models.citation import CitedAnswer

CITATION_PATTERN = re.compile(r"\[Source:\s*([^\]]+)\]")
SOURCES_HEADING = "Sources:"


def process_citations(text: str) -> CitedAnswer:
    """
    Number citation markers in a single left-to-right pass.

    Args:
        text: Model output

    Returns:
        CitedAnswer: Rewritten text and distinct labels; the text is returned
        unchanged (with no sources) when it holds no markers
    """
    numbering: dict[str, int] = {}

    def substitute(match: re.Match) -> str:
        label = match.group(1)
        if label not in numbering:
            numbering[label] = len(numbering) + 1
        return f"[{numbering[label]}]"

    rewritten = CITATION_PATTERN.sub(substitute, text)
    return CitedAnswer(text=rewritten, sources=list(numbering))


def render_source_list(sources: list[str]) -> str:
    """Render labels as a numbered reference list, one per line."""
    return "\n".join(f"[{i}] {label}" for i, label in enumerate(sources, start=1))


def render_answer(text: str) -> str:
    """
    Render model output with numbered references and a trailing source list.

    Returns:
        str: Original text when no markers are present
    """
    answer = process_citations(text)
    if not answer.sources:
        return text
    return f"{answer.text}\n\n{SOURCES_HEADING}\n{render_source_list(answer.sources)}"
