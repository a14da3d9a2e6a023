"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import chromadb

from notes_index.config import settings
from notes_index.errors import VectorStoreError
from notes_index.retrieval.base import VectorStoreBase
from notes_index.retrieval.models import CollectionStats, IndexPoint, MetadataFilter

logger = logging.getLogger(__name__)

# Chroma caps a single upsert call well above this.
UPSERT_BATCH_SIZE = 1000


def _build_chroma_where(filters: list[MetadataFilter]) -> dict[str, Any] | None:
    """Convert a list of :class:`MetadataFilter` to Chroma ``where`` syntax."""
    if not filters:
        return None

    _OP_MAP = {
        "eq": "$eq",
        "ne": "$ne",
        "gt": "$gt",
        "gte": "$gte",
        "lt": "$lt",
        "lte": "$lte",
        "in": "$in",
        "nin": "$nin",
    }

    clauses: list[dict[str, Any]] = []
    for f in filters:
        chroma_op = _OP_MAP.get(f.operator)
        if chroma_op is None:
            raise ValueError(f"Unsupported filter operator: {f.operator!r}")
        clauses.append({f.field: {chroma_op: f.value}})

    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store using cosine distance.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built Chroma client; when given, *host* and *port* are ignored.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        client: Any = None,
    ) -> None:
        super().__init__(collection_name)
        try:
            self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
            self._collection = self._open_collection()
        except Exception as exc:
            raise VectorStoreError(f"Cannot open Chroma collection {collection_name!r}: {exc}") from exc

    def _open_collection(self) -> Any:
        return self._client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    # -- VectorStoreBase overrides --------------------------------------------

    def upsert(self, points: list[IndexPoint]) -> int:
        if not points:
            return 0

        timestamp = int(time.time())
        ids = [uuid.uuid4().hex for _ in points]
        embeddings = [p.embedding for p in points]
        documents = [p.content for p in points]
        metadatas = [
            {"path": p.path, "point_type": p.point_type.value, "timestamp": timestamp} for p in points
        ]

        try:
            for start in range(0, len(ids), UPSERT_BATCH_SIZE):
                end = start + UPSERT_BATCH_SIZE
                self._collection.upsert(
                    ids=ids[start:end],
                    embeddings=embeddings[start:end],
                    documents=documents[start:end],
                    metadatas=metadatas[start:end],
                )
        except Exception as exc:
            raise VectorStoreError(f"Upsert into {self.collection_name!r} failed: {exc}") from exc

        logger.info("Upserted %d points into %r", len(ids), self.collection_name)
        return len(ids)

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 10,
        filters: list[MetadataFilter] | None = None,
    ) -> list[dict[str, Any]]:
        where = _build_chroma_where(filters) if filters else None

        try:
            results = self._collection.query(
                query_embeddings=[query_embedding],
                n_results=k,
                where=where,
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            raise VectorStoreError(f"Search in {self.collection_name!r} failed: {exc}") from exc

        hits: list[dict[str, Any]] = []
        ids = results.get("ids", [[]])[0]
        docs = results.get("documents", [[]])[0]
        metas = results.get("metadatas", [[]])[0]
        distances = results.get("distances", [[]])[0]

        for point_id, content, meta, dist in zip(ids, docs, metas, distances):
            # Cosine distance lies in [0, 2]; report similarity instead.
            hits.append(
                {
                    "id": point_id,
                    "content": content or "",
                    "score": 1.0 - dist,
                    "metadata": meta or {},
                }
            )
        return hits

    def clear(self) -> None:
        try:
            self._client.delete_collection(name=self.collection_name)
            self._collection = self._open_collection()
        except Exception as exc:
            raise VectorStoreError(f"Clearing {self.collection_name!r} failed: {exc}") from exc
        logger.info("Collection %r cleared", self.collection_name)

    def stats(self) -> CollectionStats:
        try:
            total = self._collection.count()
        except Exception as exc:
            raise VectorStoreError(f"Cannot count {self.collection_name!r}: {exc}") from exc
        return CollectionStats(total_points=total, collection_name=self.collection_name)

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
