"""FastAPI dependency providers for the store, embeddings, and services.

The store and embedding backend are built once per process; tests
replace them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from langchain_core.embeddings import Embeddings

from notes_index.ingestion.indexer import NoteIndexer
from notes_index.retrieval.base import VectorStoreBase
from notes_index.retrieval.retriever import SemanticRetriever


@lru_cache
def get_store() -> VectorStoreBase:
    """Return the process-wide Chroma store."""
    from notes_index.retrieval.chroma_store import ChromaVectorStore

    return ChromaVectorStore()


@lru_cache
def get_embeddings() -> Embeddings:
    """Return the process-wide embedding function."""
    from notes_index.ingestion.embedder import get_embedding_function

    return get_embedding_function()


def get_indexer(
    store: VectorStoreBase = Depends(get_store),
    embeddings: Embeddings = Depends(get_embeddings),
) -> NoteIndexer:
    return NoteIndexer(store, embeddings)


def get_retriever(
    store: VectorStoreBase = Depends(get_store),
    embeddings: Embeddings = Depends(get_embeddings),
) -> SemanticRetriever:
    return SemanticRetriever(store, embeddings)
