"""
Retrieval — vector storage and semantic search.

This module wraps the vector store behind a clean interface so that the
indexer and the HTTP layer never need to know which DB is backing them.

Public surface
--------------
- :class:`SemanticRetriever` — type-aware semantic search.
- :class:`VectorStoreBase` — abstract backend (subclass for Qdrant, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`PointType`, :class:`IndexPoint`, :class:`SearchResult`,
  :class:`CollectionStats`, :class:`MetadataFilter` — data models.
"""

from notes_index.retrieval.base import VectorStoreBase
from notes_index.retrieval.models import (
    CollectionStats,
    IndexPoint,
    MetadataFilter,
    PointType,
    SearchResult,
)
from notes_index.retrieval.retriever import SemanticRetriever

__all__ = [
    "ChromaVectorStore",
    "CollectionStats",
    "IndexPoint",
    "MetadataFilter",
    "PointType",
    "SearchResult",
    "SemanticRetriever",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from notes_index.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
