"""
Document API endpoints.

Routes:
- POST /documents - Ingest raw text
- POST /documents/upload - Upload and ingest a PDF
- GET /documents - List the caller's documents
- DELETE /documents/{doc_id} - Delete document and its passages

Dependencies: rag_engine.application.services, rag_engine.models
System role: Document HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from rag_engine.api.deps import get_document_service, get_owner_id
from rag_engine.api.routers.router_utils import to_http_exception
from rag_engine.application.services.document_service import (
    DEFAULT_LIST_LIMIT,
    DocumentService,
)
from rag_engine.core.exceptions import RagEngineException
from rag_engine.models.document import (
    DocumentListResponse,
    DocumentResponse,
    IngestTextRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=DocumentResponse, status_code=201)
async def ingest_text(
    request: IngestTextRequest,
    owner_id: UUID = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Ingest raw text as a document.

    Args:
        request: Title, content and optional source/metadata
        owner_id: Caller identity (X-Owner-Id)
        document_service: Injected DocumentService

    Returns:
        DocumentResponse: Created document

    Raises:
        HTTPException(400): Empty content or title
        HTTPException(502): Embedding service failure
        HTTPException(503): Server under memory pressure
    """
    try:
        document = await document_service.ingest_text(
            title=request.title,
            content=request.content,
            owner_id=owner_id,
            source=request.source,
            metadata=request.metadata,
        )
    except RagEngineException as e:
        raise to_http_exception(e) from e

    return DocumentResponse.from_document(document)


@router.post("/upload", response_model=DocumentResponse, status_code=201)
async def upload_pdf(
    file: UploadFile = File(...),
    owner_id: UUID = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Upload a PDF, extract its text and ingest it.

    Args:
        file: Multipart PDF upload
        owner_id: Caller identity (X-Owner-Id)
        document_service: Injected DocumentService

    Returns:
        DocumentResponse: Created document (metadata carries page and chunk counts)

    Raises:
        HTTPException(400): Not a PDF, unreadable, timed out, or too little text
        HTTPException(413): File larger than the upload limit
        HTTPException(503): Server under memory pressure
    """
    filename = file.filename or "document.pdf"
    data = await file.read()

    logger.info(
        "PDF upload received",
        extra={
            "upload_filename": filename,
            "size_bytes": len(data),
            "owner_id": str(owner_id),
        },
    )

    try:
        document = await document_service.ingest_pdf(
            filename=filename,
            data=data,
            owner_id=owner_id,
            content_type=file.content_type,
        )
    except RagEngineException as e:
        raise to_http_exception(e) from e
    finally:
        await file.close()

    return DocumentResponse.from_document(document)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    limit: int = Query(default=DEFAULT_LIST_LIMIT, ge=1, le=500),
    owner_id: UUID = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List the caller's documents, newest first."""
    documents = await document_service.list_documents(owner_id, limit=limit)
    return DocumentListResponse(
        documents=[DocumentResponse.from_document(doc) for doc in documents],
        total=len(documents),
    )


@router.delete("/{doc_id}", status_code=204)
async def delete_document(
    doc_id: UUID,
    owner_id: UUID = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """
    Delete a document and its passages.

    Raises:
        HTTPException(404): Document not found or owned by someone else
    """
    try:
        await document_service.delete_document(doc_id, owner_id)
    except RagEngineException as e:
        raise to_http_exception(e) from e

    logger.info(
        "Document deleted",
        extra={"document_id": str(doc_id), "owner_id": str(owner_id)},
    )
