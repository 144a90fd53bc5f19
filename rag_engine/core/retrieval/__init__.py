"""
Similarity retrieval and prompt context assembly.

Exports: SimilarityRetriever, build_context_prompt
"""

from .context_builder import build_context_prompt
from .retriever import SimilarityRetriever

__all__ = ["SimilarityRetriever", "build_context_prompt"]
