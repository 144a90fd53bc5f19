"""
Search and citation API endpoints.

Routes:
- POST /search - Similarity search over the caller's passages
- POST /citations/render - Number [Source: X] markers in an answer

Dependencies: rag_engine.application.services, rag_engine.core.citations, rag_engine.models
System role: Retrieval HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from rag_engine.api.deps import get_owner_id, get_retrieval_service
from rag_engine.api.routers.router_utils import to_http_exception
from rag_engine.application.services.retrieval_service import RetrievalService
from rag_engine.core.citations.citation_processor import process_citations
from rag_engine.core.exceptions import RagEngineException
from rag_engine.models.citation import CitedAnswer, RenderCitationsRequest
from rag_engine.models.retrieval import SearchRequest, SearchResponse

router = APIRouter(tags=["search"])


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    owner_id: UUID = Depends(get_owner_id),
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> SearchResponse:
    """
    Search the caller's passages.

    An empty result list means nothing cleared the threshold.

    Raises:
        HTTPException(400): Blank query
        HTTPException(502): Embedding service or passage store unavailable
    """
    try:
        results = await retrieval_service.search(
            request.query,
            owner_id=owner_id,
            limit=request.limit,
            threshold=request.threshold,
        )
    except RagEngineException as e:
        raise to_http_exception(e) from e

    return SearchResponse(results=results)


@router.post("/citations/render", response_model=CitedAnswer)
async def render_citations(request: RenderCitationsRequest) -> CitedAnswer:
    """Replace [Source: X] markers with numbered references."""
    return process_citations(request.text)
