"""
Passage store factory for selecting between in-memory (dev) and pgvector (prod).

Depends on RETRIEVAL_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: rag_engine.boundary.vdb, rag_engine.boundary.db, rag_engine.configs
System role: Passage store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from rag_engine.boundary.vdb.memory_store import InMemoryPassageStore
from rag_engine.boundary.vdb.passage_store import PassageStore
from rag_engine.boundary.vdb.pgvector_store import PgVectorStore
from rag_engine.configs import get_settings

logger = logging.getLogger(__name__)


def create_passage_store(session_factory: async_sessionmaker | None = None) -> PassageStore:
    """
    Factory function to get passage store based on environment configuration.

    Args:
        session_factory: Session factory for the pgvector store
            (built from DatabaseSettings if None)

    Returns:
        InMemoryPassageStore or PgVectorStore: Configured passage store instance

    Raises:
        ValueError: If RETRIEVAL_STORE_TYPE is invalid
    """
    settings = get_settings()
    store_type = settings.retrieval.store_type.lower()

    if store_type == "memory":
        logger.info(
            f"{__name__}:create_passage_store - Creating in-memory passage store (local dev mode)"
        )
        return InMemoryPassageStore()

    elif store_type == "pgvector":
        logger.info(
            f"{__name__}:create_passage_store - Creating pgvector passage store (production mode)"
        )
        if session_factory is None:
            from rag_engine.boundary.db.connection import get_async_session_factory

            session_factory = get_async_session_factory()
        return PgVectorStore(session_factory)

    else:
        raise ValueError(
            f"Invalid RETRIEVAL_STORE_TYPE: {store_type}. "
            f"Must be 'memory' (dev) or 'pgvector' (production)."
        )
