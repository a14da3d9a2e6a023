"""Abstract base class for vector-store backends.

Adding a new backend (Qdrant, Weaviate, pgvector …) only requires
subclassing :class:`VectorStoreBase` and implementing the abstract
methods.  The indexer and retriever are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from notes_index.retrieval.models import CollectionStats, IndexPoint, MetadataFilter


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def upsert(self, points: list[IndexPoint]) -> int:
        """Persist *points*, stamping each with the current time.

        Returns the number of points written.
        """
        ...

    @abstractmethod
    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 10,
        filters: list[MetadataFilter] | None = None,
    ) -> list[dict[str, Any]]:
        """Return the top-*k* points closest to *query_embedding*.

        Each result dict **must** contain at least:

        * ``"id"`` – point identifier
        * ``"content"`` – the embedded text
        * ``"score"`` – similarity score (higher = more similar)
        * ``"metadata"`` – ``path``, ``point_type`` and ``timestamp``

        Parameters
        ----------
        query_embedding:
            Dense vector for the query.
        k:
            Number of results to return.
        filters:
            Optional metadata filters applied server-side.
        """
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every point from the collection."""
        ...

    @abstractmethod
    def stats(self) -> CollectionStats:
        """Return the number of stored points."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...
