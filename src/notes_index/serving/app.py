"""FastAPI application exposing note indexing and semantic search."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from notes_index.config import settings
from notes_index.errors import NotesIndexError
from notes_index.ingestion.indexer import NoteIndexer
from notes_index.retrieval.base import VectorStoreBase
from notes_index.retrieval.models import PointType
from notes_index.retrieval.retriever import SemanticRetriever
from notes_index.serving.dependencies import get_indexer, get_retriever, get_store

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Notes Index API",
    version="0.1.0",
    description="Semantic indexing and search over Markdown notes and their images.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request / Response schemas ────────────────────────────────────────
class HealthResponse(BaseModel):
    status: str
    version: str


class IndexRequest(BaseModel):
    """A note to index; ``point_type="image"`` also indexes its images."""

    path: str
    content: str
    point_type: PointType = PointType.TEXT


class IndexResponse(BaseModel):
    success: bool
    message: str
    text_count: int | None = None
    image_count: int | None = None


class SearchRequest(BaseModel):
    """Incoming semantic query."""

    query: str
    limit: int = 10
    point_type: PointType | None = None


class SearchResultItem(BaseModel):
    path: str
    content: str
    point_type: PointType
    score: float


class SearchResponse(BaseModel):
    success: bool
    results: list[SearchResultItem]
    count: int


class ClearResponse(BaseModel):
    success: bool
    message: str


class StatsResponse(BaseModel):
    success: bool
    total_points: int
    collection_name: str


# ── Error handling ────────────────────────────────────────────────────
@app.exception_handler(NotesIndexError)
async def notes_index_error_handler(request: Request, exc: NotesIndexError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(status="ok", version=app.version)


@app.post("/api/index", response_model=IndexResponse)
def index(request: IndexRequest, indexer: NoteIndexer = Depends(get_indexer)) -> IndexResponse:
    """Chunk, embed and store a note."""
    if request.point_type is PointType.IMAGE:
        report = indexer.index_markdown_with_images(request.path, request.content)
        text_count, image_count = report.text_count, report.image_count
    else:
        text_count, image_count = indexer.index_markdown(request.path, request.content), 0

    return IndexResponse(
        success=True,
        message=f"Indexed {text_count} text chunks and {image_count} images",
        text_count=text_count,
        image_count=image_count,
    )


@app.post("/api/search", response_model=SearchResponse)
def search(request: SearchRequest, retriever: SemanticRetriever = Depends(get_retriever)) -> SearchResponse:
    """Run a semantic search, optionally restricted to text or images."""
    results = retriever.search(request.query, k=request.limit, point_type=request.point_type)
    items = [
        SearchResultItem(path=r.path, content=r.content, point_type=r.point_type, score=r.score)
        for r in results
    ]
    return SearchResponse(success=True, results=items, count=len(items))


@app.post("/api/clear", response_model=ClearResponse)
def clear(store: VectorStoreBase = Depends(get_store)) -> ClearResponse:
    """Drop every indexed point."""
    store.clear()
    return ClearResponse(success=True, message="Database cleared successfully")


@app.get("/api/stats", response_model=StatsResponse)
def stats(store: VectorStoreBase = Depends(get_store)) -> StatsResponse:
    """Report collection size."""
    collection = store.stats()
    return StatsResponse(
        success=True,
        total_points=collection.total_points,
        collection_name=collection.collection_name,
    )
