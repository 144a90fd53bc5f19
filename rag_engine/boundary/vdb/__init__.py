"""
Vector database boundary layer.

Provides passage stores for storage and similarity search.
- PgVectorStore: Production PostgreSQL + pgvector store
- InMemoryPassageStore: Local dev and test store

Dependencies: sqlalchemy, pgvector, numpy
System role: Passage store adapter for RAG retrieval
"""

from rag_engine.boundary.vdb.memory_store import InMemoryPassageStore
from rag_engine.boundary.vdb.passage_store import PassageStore
from rag_engine.boundary.vdb.pgvector_store import PgVectorStore
from rag_engine.boundary.vdb.store_factory import create_passage_store

__all__ = [
    "PassageStore",
    "PgVectorStore",
    "InMemoryPassageStore",
    "create_passage_store",
]
