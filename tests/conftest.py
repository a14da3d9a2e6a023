"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from typing import Any

import pytest
from langchain_core.embeddings import Embeddings

from notes_index.retrieval.base import VectorStoreBase
from notes_index.retrieval.models import CollectionStats, IndexPoint, MetadataFilter


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes for deterministic testing ─────────────────────────────────────


class FakeEmbeddings(Embeddings):
    """Deterministic embeddings: ``[len(text), call_index]`` per text."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [[float(len(t)), float(len(self.calls))] for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append([text])
        return [float(len(text)), 0.0]


class FailingEmbeddings(Embeddings):
    """Embeddings whose backend is always unreachable."""

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        raise ConnectionError("embedding server unreachable")

    def embed_query(self, text: str) -> list[float]:
        raise ConnectionError("embedding server unreachable")


class FakeVectorStore(VectorStoreBase):
    """In-memory fake that records upserts and returns canned hits."""

    def __init__(self, hits: list[dict[str, Any]] | None = None) -> None:
        super().__init__("test-collection")
        self._hits: list[dict[str, Any]] = hits or []
        self.points: list[IndexPoint] = []
        self.upsert_calls = 0
        self.last_filters: list[MetadataFilter] | None = None
        self.last_k: int | None = None
        self.cleared = False

    def upsert(self, points: list[IndexPoint]) -> int:
        self.upsert_calls += 1
        self.points.extend(points)
        return len(points)

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 10,
        filters: list[MetadataFilter] | None = None,
    ) -> list[dict[str, Any]]:
        self.last_filters = filters
        self.last_k = k
        return self._hits[:k]

    def clear(self) -> None:
        self.cleared = True
        self.points = []

    def stats(self) -> CollectionStats:
        return CollectionStats(total_points=len(self.points), collection_name=self.collection_name)

    def health_check(self) -> bool:
        return True


SAMPLE_HITS: list[dict[str, Any]] = [
    {
        "id": "p-001",
        "content": "# Paris\n\nThe Eiffel Tower at night.",
        "score": 0.91,
        "metadata": {"path": "travel/paris.md", "point_type": "text", "timestamp": 1700000000},
    },
    {
        "id": "p-002",
        "content": "## Paris\n\n![[paris/eiffel.jpg]]\n\nPhoto of the tower.",
        "score": 0.84,
        "metadata": {"path": "paris/eiffel.jpg", "point_type": "image", "timestamp": 1700000001},
    },
    {
        "id": "p-003",
        "content": "# London\n\nBig Ben.",
        "score": 0.32,
        "metadata": {"path": "travel/london.md", "point_type": "text", "timestamp": 1700000002},
    },
]


@pytest.fixture()
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture()
def failing_embeddings() -> FailingEmbeddings:
    return FailingEmbeddings()


@pytest.fixture()
def fake_store() -> FakeVectorStore:
    return FakeVectorStore(hits=SAMPLE_HITS)


@pytest.fixture()
def store_factory() -> type[FakeVectorStore]:
    return FakeVectorStore
