"""
Retrieval service orchestrator.

Search with configured defaults, chat-context assembly and citation rendering.
Context assembly never fails a chat turn: retrieval errors are logged and an
empty context is returned.

Dependencies: rag_engine.core, rag_engine.configs
System role: RAG retrieval orchestration
"""

import logging
import uuid

from rag_engine.configs.retrieval import RetrievalSettings
from rag_engine.core.citations.citation_processor import process_citations
from rag_engine.core.exceptions import RagEngineException
from rag_engine.core.retrieval.context_builder import build_context_prompt
from rag_engine.core.retrieval.retriever import SimilarityRetriever
from rag_engine.models.citation import CitedAnswer
from rag_engine.models.retrieval import SimilarityResult

logger = logging.getLogger(__name__)


class RetrievalService:
    """Retrieval and citation orchestration."""

    def __init__(
        self,
        retriever: SimilarityRetriever,
        settings: RetrievalSettings | None = None,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            retriever: Similarity retriever
            settings: Retrieval settings (defaults if None)
        """
        self._retriever = retriever
        self.settings = settings or RetrievalSettings()

    async def search(
        self,
        query: str,
        owner_id: uuid.UUID | None = None,
        limit: int | None = None,
        threshold: float | None = None,
    ) -> list[SimilarityResult]:
        """
        Search passages, falling back to configured limit/threshold.

        Raises:
            InvalidContentError: Blank query
            EmbeddingServiceError: Query embedding failed
            RetrievalUnavailableError: Passage store unavailable
        """
        return await self._retriever.retrieve(
            query,
            owner_id=owner_id,
            limit=self.settings.default_limit if limit is None else limit,
            threshold=self.settings.default_threshold if threshold is None else threshold,
        )

    async def build_context(self, query: str, owner_id: uuid.UUID | None = None) -> str:
        """
        Build the document-context block for a chat prompt.

        Args:
            query: Latest user message
            owner_id: Owner scope

        Returns:
            str: Context block, or "" when nothing matched or retrieval failed
        """
        try:
            results = await self._retriever.retrieve(
                query,
                owner_id=owner_id,
                limit=self.settings.context_limit,
                threshold=self.settings.default_threshold,
            )
        except RagEngineException as e:
            logger.warning(
                "Context retrieval failed, continuing without document context",
                extra={"owner_id": str(owner_id), "error": str(e)},
            )
            return ""

        logger.debug("Context built", extra={"passage_count": len(results)})
        return build_context_prompt(results)

    def render_answer(self, text: str) -> CitedAnswer:
        """Number [Source: X] markers in a generated answer."""
        return process_citations(text)
