"""
Test suite for DocumentCRUD database operations.

Tests owner-scoped queries and deletion. Uses async session mocks and
inspects the compiled SQL for PostgreSQL.

System role: Verification of document persistence layer
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from rag_engine.boundary.db.CRUD.document_crud import DocumentCRUD
from rag_engine.boundary.db.models.document_model import DocumentModel


def compiled(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


@pytest.fixture
def document_crud() -> DocumentCRUD:
    """Provide DocumentCRUD instance for testing."""
    return DocumentCRUD()


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def mock_document_model(owner_id: uuid.UUID) -> DocumentModel:
    """Provide mock DocumentModel instance."""
    doc = DocumentModel()
    doc.id = uuid.uuid4()
    doc.title = "Lecture notes"
    doc.content = "Lecture content"
    doc.source = "notes.pdf"
    doc.metadata_ = {}
    doc.owner_id = owner_id
    doc.created_at = datetime.now(timezone.utc)
    doc.updated_at = datetime.now(timezone.utc)
    return doc


class TestDocumentCRUDInit:
    """Test suite for DocumentCRUD initialization."""

    def test_init_should_set_model_to_document_model(self) -> None:
        # Act
        crud = DocumentCRUD()

        # Assert
        assert crud.model == DocumentModel


class TestDocumentCRUDCreate:
    """Test suite for inherited create()."""

    @pytest.mark.asyncio
    async def test_create_should_add_flush_and_refresh(
        self, document_crud: DocumentCRUD, mock_session: AsyncSession, owner_id: uuid.UUID
    ) -> None:
        # Act
        document = await document_crud.create(
            mock_session, title="T", content="C", owner_id=owner_id
        )

        # Assert
        assert isinstance(document, DocumentModel)
        assert document.title == "T"
        mock_session.add.assert_called_once_with(document)
        mock_session.flush.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(document)


class TestDocumentCRUDGetByOwnerID:
    """Test suite for DocumentCRUD.get_by_owner_id()."""

    @pytest.mark.asyncio
    async def test_should_return_owner_documents_newest_first(
        self,
        document_crud: DocumentCRUD,
        mock_session: AsyncSession,
        mock_document_model: DocumentModel,
        owner_id: uuid.UUID,
    ) -> None:
        # Arrange
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [mock_document_model]
        mock_session.execute.return_value = mock_result

        # Act
        documents = await document_crud.get_by_owner_id(mock_session, owner_id, limit=50)

        # Assert
        assert documents == [mock_document_model]
        sql = compiled(mock_session.execute.call_args[0][0])
        assert "rag_documents.owner_id = " in sql
        assert "ORDER BY rag_documents.created_at DESC" in sql
        assert "LIMIT" in sql

    @pytest.mark.asyncio
    async def test_without_limit_should_not_limit(
        self, document_crud: DocumentCRUD, mock_session: AsyncSession, owner_id: uuid.UUID
    ) -> None:
        mock_session.execute.return_value = MagicMock()

        await document_crud.get_by_owner_id(mock_session, owner_id)

        assert "LIMIT" not in compiled(mock_session.execute.call_args[0][0])


class TestDocumentCRUDDeleteOwned:
    """Test suite for DocumentCRUD.delete_owned()."""

    @pytest.mark.asyncio
    async def test_should_return_none_when_not_owned(
        self, document_crud: DocumentCRUD, mock_session: AsyncSession, owner_id: uuid.UUID
    ) -> None:
        # Arrange
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = mock_result

        # Act
        deleted = await document_crud.delete_owned(mock_session, uuid.uuid4(), owner_id)

        # Assert
        assert deleted is None
        assert mock_session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_should_delete_and_return_owned_document(
        self,
        document_crud: DocumentCRUD,
        mock_session: AsyncSession,
        mock_document_model: DocumentModel,
        owner_id: uuid.UUID,
    ) -> None:
        # Arrange
        select_result = MagicMock()
        select_result.scalar_one_or_none.return_value = mock_document_model
        mock_session.execute.side_effect = [select_result, MagicMock(rowcount=1)]

        # Act
        deleted = await document_crud.delete_owned(mock_session, mock_document_model.id, owner_id)

        # Assert
        assert deleted is mock_document_model
        delete_sql = compiled(mock_session.execute.call_args_list[1][0][0])
        assert delete_sql.startswith("DELETE FROM rag_documents")
