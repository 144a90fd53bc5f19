import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from rag_engine.api.main import create_app
from rag_engine.api.deps.dependencies import get_document_service, get_retrieval_service
from rag_engine.application.services.document_service import DocumentService
from rag_engine.application.services.retrieval_service import RetrievalService
from rag_engine.core.exceptions import (
    EmbeddingServiceError,
    InvalidContentError,
    RetrievalUnavailableError,
)
from rag_engine.core.retrieval.retriever import SimilarityRetriever
from rag_engine.models.retrieval import SimilarityResult


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


@pytest.fixture
def mock_retrieval_service(client):
    service = MagicMock(spec=RetrievalService)
    service.search = AsyncMock(return_value=[])
    client.app.dependency_overrides[get_retrieval_service] = lambda: service
    return service


@pytest.fixture
def headers(owner_id):
    return {"X-Owner-Id": str(owner_id)}


def test_search_returns_ranked_results(client, mock_retrieval_service, headers, owner_id):
    result = SimilarityResult(
        passage_id=uuid4(),
        document_id=uuid4(),
        document_title="Biology",
        content="Mitochondria produce ATP.",
        chunk_index=3,
        similarity=0.82,
        rank=1,
    )
    mock_retrieval_service.search.return_value = [result]

    response = client.post(
        "/api/v1/search",
        json={"query": "What makes ATP?", "limit": 3, "threshold": 0.5},
        headers=headers,
    )

    assert response.status_code == 200
    (item,) = response.json()["results"]
    assert item["document_title"] == "Biology"
    assert item["similarity"] == 0.82
    assert item["rank"] == 1
    mock_retrieval_service.search.assert_awaited_once_with(
        "What makes ATP?", owner_id=owner_id, limit=3, threshold=0.5
    )


def test_search_with_no_matches_returns_empty_list(client, mock_retrieval_service, headers):
    response = client.post("/api/v1/search", json={"query": "unrelated"}, headers=headers)

    assert response.status_code == 200
    assert response.json() == {"results": []}


def test_search_requires_owner(client, mock_retrieval_service):
    response = client.post("/api/v1/search", json={"query": "ATP"})

    assert response.status_code == 401


@pytest.mark.parametrize(
    "body",
    [
        {"query": ""},
        {"query": "ATP", "limit": 0},
        {"query": "ATP", "threshold": 1.5},
    ],
)
def test_search_validates_request(client, mock_retrieval_service, headers, body):
    response = client.post("/api/v1/search", json=body, headers=headers)

    assert response.status_code == 422


@pytest.mark.parametrize(
    "error, status_code",
    [
        (InvalidContentError("Query is required", field="query"), 400),
        (EmbeddingServiceError("Failed to generate embedding: timeout"), 502),
        (RetrievalUnavailableError("Similarity search failed: connection refused"), 502),
    ],
)
def test_search_maps_domain_errors(client, mock_retrieval_service, headers, error, status_code):
    mock_retrieval_service.search.side_effect = error

    response = client.post("/api/v1/search", json={"query": "   "}, headers=headers)

    assert response.status_code == status_code


def test_render_citations(client):
    def unavailable_retrieval_service():
        raise RuntimeError("embedding credentials not configured")

    client.app.dependency_overrides[get_retrieval_service] = unavailable_retrieval_service

    response = client.post(
        "/api/v1/citations/render",
        json={"text": "ATP [Source: Biology]. Water [Source: Chemistry]. Again [Source: Biology]."},
    )

    assert response.status_code == 200
    assert response.json() == {
        "text": "ATP [1]. Water [2]. Again [1].",
        "sources": ["Biology", "Chemistry"],
    }


def test_ingest_then_search_is_owner_scoped(
    client, pipeline, memory_store, fake_embedder, calm_governor, owner_id, other_owner_id
):
    document_service = DocumentService(
        pipeline=pipeline,
        store=memory_store,
        extractor=MagicMock(),
        governor=calm_governor,
    )
    retrieval_service = RetrievalService(SimilarityRetriever(fake_embedder, memory_store))
    client.app.dependency_overrides[get_document_service] = lambda: document_service
    client.app.dependency_overrides[get_retrieval_service] = lambda: retrieval_service

    created = client.post(
        "/api/v1/documents",
        json={"title": "Biology", "content": "Mitochondria produce ATP"},
        headers={"X-Owner-Id": str(owner_id)},
    )
    assert created.status_code == 201

    own = client.post(
        "/api/v1/search",
        json={"query": "Mitochondria produce ATP"},
        headers={"X-Owner-Id": str(owner_id)},
    )
    other = client.post(
        "/api/v1/search",
        json={"query": "Mitochondria produce ATP"},
        headers={"X-Owner-Id": str(other_owner_id)},
    )

    assert [r["document_title"] for r in own.json()["results"]] == ["Biology"]
    assert other.json() == {"results": []}
