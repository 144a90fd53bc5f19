"""
Shared test fixtures and configuration for entire test suite.

Provides: fake embedder, fixed-pressure governors, in-memory passage store,
ingestion pipeline wiring, owner identities
Dependencies: pytest, rag_engine
System role: Test infrastructure and fixture management
"""

import asyncio
import hashlib
from typing import Callable
import uuid

import pytest

from rag_engine.boundary.vdb.memory_store import InMemoryPassageStore
from rag_engine.core.exceptions import EmbeddingServiceError
from rag_engine.core.ingestion.pipeline import BatchIngestionPipeline
from rag_engine.core.resource_governor import ResourceGovernor

TEST_DIMENSION = 8


def deterministic_vector(text: str, dimension: int = TEST_DIMENSION) -> list[float]:
    """Stable, strictly positive pseudo-embedding derived from a hash of text."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return [(digest[i % len(digest)] + 1) / 256.0 for i in range(dimension)]


class FakeEmbedder:
    """
    In-process Embedder double.

    Records every call, returns configured vectors when given, and can be
    told to fail or to return a short vector for specific texts.
    """

    def __init__(
        self,
        dimension: int = TEST_DIMENSION,
        vectors: dict[str, list[float]] | None = None,
        fail_on: set[str] | None = None,
        short_on: set[str] | None = None,
    ) -> None:
        self.dimension = dimension
        self.vectors = dict(vectors or {})
        self.fail_on = set(fail_on or ())
        self.short_on = set(short_on or ())
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if text in self.fail_on:
                raise EmbeddingServiceError("Failed to generate embedding: backend down")
            if text in self.short_on:
                return [0.5] * (self.dimension - 1)
            if text in self.vectors:
                return list(self.vectors[text])
            return deterministic_vector(text, self.dimension)
        finally:
            self.in_flight -= 1


def fixed_probe(ratio: float) -> Callable[[], tuple[int, int]]:
    """Memory probe reporting a constant usage ratio."""
    return lambda: (int(ratio * 1000), 1000)


@pytest.fixture
def owner_id() -> uuid.UUID:
    """Provide owner UUID for testing."""
    return uuid.uuid4()


@pytest.fixture
def other_owner_id() -> uuid.UUID:
    """Provide a second, unrelated owner UUID."""
    return uuid.uuid4()


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    """Provide deterministic embedder of TEST_DIMENSION floats."""
    return FakeEmbedder()


@pytest.fixture
def embedder_factory() -> type[FakeEmbedder]:
    """Provide FakeEmbedder class for tests that need custom behaviour."""
    return FakeEmbedder


@pytest.fixture
def memory_store() -> InMemoryPassageStore:
    """Provide empty in-memory passage store."""
    return InMemoryPassageStore()


@pytest.fixture
def calm_governor() -> ResourceGovernor:
    """Provide governor that always reports normal pressure."""
    return ResourceGovernor(memory_probe=fixed_probe(0.5))


@pytest.fixture
def make_governor() -> Callable[[float], ResourceGovernor]:
    """Provide factory for governors pinned at a usage ratio."""

    def factory(ratio: float) -> ResourceGovernor:
        return ResourceGovernor(memory_probe=fixed_probe(ratio))

    return factory


@pytest.fixture
def pipeline(
    fake_embedder: FakeEmbedder,
    memory_store: InMemoryPassageStore,
    calm_governor: ResourceGovernor,
) -> BatchIngestionPipeline:
    """Provide pipeline wired to fakes with batch size 10."""
    return BatchIngestionPipeline(
        embedder=fake_embedder,
        store=memory_store,
        governor=calm_governor,
        batch_size=10,
        expected_dimension=TEST_DIMENSION,
    )
