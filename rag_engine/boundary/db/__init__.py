"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_tables()
  - DocumentModel, PassageModel: Core domain entities
  - document_crud, passage_crud: CRUD operation singletons

Dependencies: sqlalchemy, pgvector, rag_engine.configs
System role: Database adapter for documents and embedded passages
"""

from rag_engine.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from rag_engine.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from rag_engine.boundary.db.models import DocumentModel, PassageModel
from rag_engine.boundary.db.CRUD import (
    BaseCRUD,
    DocumentCRUD,
    PassageCRUD,
    document_crud,
    passage_crud,
)

__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentModel",
    "PassageModel",
    "BaseCRUD",
    "DocumentCRUD",
    "PassageCRUD",
    "document_crud",
    "passage_crud",
]
