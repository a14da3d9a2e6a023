"""Semantic retriever — type-aware search over indexed notes and images.

Usage::

    from notes_index.retrieval.models import PointType
    from notes_index.retrieval.retriever import SemanticRetriever

    retriever = SemanticRetriever()
    for hit in retriever.search("eiffel tower at night", point_type=PointType.IMAGE):
        print(hit.score, hit.path)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from notes_index.ingestion.embedder import embed_query
from notes_index.retrieval.base import VectorStoreBase
from notes_index.retrieval.models import MetadataFilter, PointType, SearchResult

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class SemanticRetriever:
    """High-level retriever that wraps any :class:`VectorStoreBase`.

    Parameters
    ----------
    store:
        A concrete vector-store backend.  When *None*, a default
        :class:`~notes_index.retrieval.chroma_store.ChromaVectorStore`
        is created from the global settings.
    embeddings:
        Embedding function for queries.  When *None*, the configured
        backend from :func:`~notes_index.ingestion.embedder.get_embedding_function`.
    default_k:
        Default number of results returned by :meth:`search`.
    score_threshold:
        Optional minimum similarity score.  Scores are cosine similarities
        in ``[-1, 1]``; when unset every hit is returned.
    """

    def __init__(
        self,
        store: VectorStoreBase | None = None,
        embeddings: Embeddings | None = None,
        *,
        default_k: int = 10,
        score_threshold: float | None = None,
    ) -> None:
        if store is None:
            from notes_index.retrieval.chroma_store import ChromaVectorStore

            store = ChromaVectorStore()
        if embeddings is None:
            from notes_index.ingestion.embedder import get_embedding_function

            embeddings = get_embedding_function()
        self._store = store
        self._embeddings = embeddings
        self.default_k = default_k
        self.score_threshold = score_threshold

    # -- public API -----------------------------------------------------------

    def search(
        self,
        query: str,
        *,
        k: int | None = None,
        point_type: PointType | None = None,
    ) -> list[SearchResult]:
        """Embed *query* and return the closest points.

        Parameters
        ----------
        query:
            Natural-language search query.
        k:
            Number of results (defaults to ``self.default_k``).
        point_type:
            Restrict results to text chunks or image contexts.
        """
        embedding = embed_query(self._embeddings, query)
        return self.search_by_embedding(embedding, k=k, point_type=point_type)

    def search_by_embedding(
        self,
        embedding: list[float],
        *,
        k: int | None = None,
        point_type: PointType | None = None,
    ) -> list[SearchResult]:
        """Same as :meth:`search` but accepts a pre-computed embedding."""
        k = k or self.default_k
        filters = [MetadataFilter.of_type(point_type)] if point_type is not None else None
        raw_hits = self._store.similarity_search(embedding, k=k, filters=filters)
        results = self._to_results(raw_hits)
        logger.debug("search returned %d / %d hits", len(results), len(raw_hits))
        return results

    # -- internals ------------------------------------------------------------

    def _to_results(self, raw_hits: list[dict[str, Any]]) -> list[SearchResult]:
        results: list[SearchResult] = []
        for hit in raw_hits:
            score = hit.get("score", 0.0)
            if self.score_threshold is not None and score < self.score_threshold:
                continue

            meta = hit.get("metadata", {})
            try:
                point_type = PointType(meta.get("point_type", PointType.TEXT.value))
            except ValueError:
                point_type = PointType.TEXT
            results.append(
                SearchResult(
                    path=meta.get("path", ""),
                    content=hit.get("content", ""),
                    point_type=point_type,
                    score=score,
                    timestamp=meta.get("timestamp", 0),
                )
            )
        return results
