"""
Database models package.

Exports:
  - DocumentModel: Ingested document
  - PassageModel: Embedded passage with pgvector column

Dependencies: sqlalchemy, pgvector, rag_engine.boundary.db.base
System role: Database model definitions for domain entities
"""

from rag_engine.boundary.db.models.document_model import DocumentModel
from rag_engine.boundary.db.models.passage_model import PassageModel

__all__ = [
    "DocumentModel",
    "PassageModel",
]
