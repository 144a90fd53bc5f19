"""
Prompt context assembly for grounded answers.

Formats retrieved passages into the system-prompt block that tells the model
to cite sources with [Source: Document Name] markers.

Dependencies: rag_engine.models
System role: Retrieval-to-prompt bridge
"""

from rag_engine.models.retrieval import SimilarityResult

CONTEXT_HEADER = "**RELEVANT DOCUMENT CONTEXT:**"
CITATION_INSTRUCTION = (
    "The following information is from your uploaded documents. "
    "When referencing this information in your response, you MUST cite the "
    "source using the format [Source: Document Name]."
)
CONTEXT_FOOTER = "**Remember: Always cite your sources when using this information!**"


def format_passage(position: int, result: SimilarityResult) -> str:
    """Render one passage as a numbered, titled source block."""
    return f"**Source {position}: {result.document_title}**\n{result.content}"


def build_context_prompt(results: list[SimilarityResult]) -> str:
    """
    Build the context block appended to the system prompt.

    Args:
        results: Ranked passages

    Returns:
        str: Context block, or "" when there is nothing to add
    """
    if not results:
        return ""

    sources = "\n\n".join(
        format_passage(position, result)
        for position, result in enumerate(results, start=1)
    )
    return f"\n\n{CONTEXT_HEADER}\n{CITATION_INSTRUCTION}\n\n{sources}\n\n{CONTEXT_FOOTER}"
