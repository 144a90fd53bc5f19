"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from rag_engine.boundary.db.CRUD import document_crud, passage_crud

    documents = await document_crud.get_by_owner_id(db, owner_id, limit=50)
"""

from rag_engine.boundary.db.CRUD.base_crud import BaseCRUD
from rag_engine.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from rag_engine.boundary.db.CRUD.passage_crud import PassageCRUD, passage_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "PassageCRUD",
    "passage_crud",
]
