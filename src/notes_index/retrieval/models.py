"""Domain models for indexed points, search results, and store filters."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class PointType(str, Enum):
    """Kind of content a stored vector was computed from."""

    TEXT = "text"
    IMAGE = "image"


class MetadataFilter(BaseModel):
    """Declarative metadata filter for vector-store queries.

    Attributes
    ----------
    field:
        The metadata key to filter on (e.g. ``"path"``, ``"point_type"``).
    operator:
        Comparison operator — one of ``eq``, ``ne``, ``gt``, ``gte``,
        ``lt``, ``lte``, ``in``, ``nin``.
    value:
        The value (or list of values for ``in`` / ``nin``) to compare against.
    """

    field: str
    operator: str = "eq"
    value: Any = None

    # -- helpers for common filters ------------------------------------------

    @classmethod
    def equals(cls, field: str, value: Any) -> MetadataFilter:
        return cls(field=field, operator="eq", value=value)

    @classmethod
    def of_type(cls, point_type: PointType) -> MetadataFilter:
        return cls.equals("point_type", point_type.value)


class IndexPoint(BaseModel):
    """A vector ready to be written to the store."""

    path: str
    content: str
    point_type: PointType
    embedding: list[float]


class SearchResult(BaseModel):
    """A stored point returned by a similarity search.

    Attributes
    ----------
    path:
        Note path for text points, image path for image points.
    content:
        The chunk or image context that was embedded.
    point_type:
        Whether the point came from text or an image.
    score:
        Similarity score, higher is more similar.
    timestamp:
        Unix time (seconds) at which the point was indexed.
    """

    path: str
    content: str
    point_type: PointType
    score: float
    timestamp: int = 0


class CollectionStats(BaseModel):
    """Size of the backing collection."""

    total_points: int
    collection_name: str
