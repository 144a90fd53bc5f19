"""
Text sanitization for ingestion.

Strips null bytes and non-printable control characters before anything is
persisted. Document-level fields additionally have whitespace runs collapsed.

Dependencies: re
System role: Input cleaning shared by ingestion stages
"""

import re

# Control characters except tab (\x09), LF (\x0A) and CR (\x0D)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_WHITESPACE_RUN = re.compile(r"\s+")


def strip_control_characters(text: str) -> str:
    """Remove null bytes and non-printable control characters."""
    return _CONTROL_CHARS.sub("", text)


def clean_text(text: str) -> str:
    """
    Clean a document-level field (title, content, source).

    Args:
        text: Raw text

    Returns:
        str: Text without control characters, whitespace runs collapsed to
        a single space, trimmed
    """
    return _WHITESPACE_RUN.sub(" ", strip_control_characters(text)).strip()


def clean_passage(text: str) -> str:
    """
    Clean passage text immediately before persistence.

    Line structure is kept; only control characters and surrounding
    whitespace are removed.
    """
    return strip_control_characters(text).strip()
