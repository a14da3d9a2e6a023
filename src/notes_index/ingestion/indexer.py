"""Indexing service — chunk notes, embed them, and write them to the store.

Text chunks are embedded in one order-preserving batch, so the n-th
vector always belongs to the n-th chunk.  Images are indexed through the
prose that surrounds them (see :mod:`notes_index.ingestion.image_context`).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel

from notes_index.config import settings
from notes_index.errors import ConfigurationError
from notes_index.ingestion.chunker import chunk_markdown
from notes_index.ingestion.embedder import embed_texts
from notes_index.ingestion.image_context import resolve_image_contexts
from notes_index.retrieval.base import VectorStoreBase
from notes_index.retrieval.models import IndexPoint, PointType

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class IndexReport(BaseModel):
    """Counts produced by an indexing call."""

    text_count: int = 0
    image_count: int = 0

    def __add__(self, other: IndexReport) -> IndexReport:
        return IndexReport(
            text_count=self.text_count + other.text_count,
            image_count=self.image_count + other.image_count,
        )


class NoteIndexer:
    """Turns Markdown notes into stored vectors.

    Parameters
    ----------
    store:
        Destination vector store.
    embeddings:
        Embedding function applied to chunk and image-context text.
    max_chunk_bytes, split_threshold_bytes:
        Chunk bounds forwarded to :func:`chunk_markdown`.
    image_context_mode, image_context_chars:
        How image context is gathered (``"section"`` or ``"window"``).
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embeddings: Embeddings,
        *,
        max_chunk_bytes: int = settings.max_chunk_bytes,
        split_threshold_bytes: int = settings.split_threshold_bytes,
        image_context_mode: str = settings.image_context_mode,
        image_context_chars: int = settings.image_context_chars,
        batch_size: int = settings.embed_batch_size,
    ) -> None:
        if image_context_mode not in ("section", "window"):
            raise ConfigurationError(
                "image_context_mode", f"expected 'section' or 'window', got {image_context_mode!r}"
            )
        self._store = store
        self._embeddings = embeddings
        self.max_chunk_bytes = max_chunk_bytes
        self.split_threshold_bytes = split_threshold_bytes
        self.image_context_mode = image_context_mode
        self.image_context_chars = image_context_chars
        self.batch_size = batch_size

    # -- public API -----------------------------------------------------------

    def index_markdown(self, path: str, content: str) -> int:
        """Index the text chunks of one note; returns the chunk count."""
        points = self._text_points(path, content)
        if points:
            self._store.upsert(points)
        logger.info("Indexed %s: %d text chunks", path, len(points))
        return len(points)

    def index_markdown_with_images(self, path: str, content: str) -> IndexReport:
        """Index text chunks plus one point per image reference.

        Image points are stored under the image's own path with the
        resolved context as content.  ``image_count`` counts every link
        found, including those whose context came out empty.
        """
        points = self._text_points(path, content)
        text_count = len(points)

        links = resolve_image_contexts(
            content,
            mode=self.image_context_mode,
            context_chars=self.image_context_chars,
        )
        described = [link for link in links if link.context]
        if described:
            vectors = embed_texts(self._embeddings, [link.context for link in described], self.batch_size)
            points.extend(
                IndexPoint(path=link.path, content=link.context, point_type=PointType.IMAGE, embedding=vector)
                for link, vector in zip(described, vectors)
            )

        if points:
            self._store.upsert(points)
        logger.info("Indexed %s: %d text chunks, %d images", path, text_count, len(links))
        return IndexReport(text_count=text_count, image_count=len(links))

    def index_directory(
        self,
        root: str | Path,
        glob: str = "**/*.md",
        *,
        with_images: bool = False,
    ) -> IndexReport:
        """Index every note below *root* matching *glob*."""
        from notes_index.ingestion.loader import load_notes

        report = IndexReport()
        documents = load_notes(root, glob)
        for doc in documents:
            source = str(doc.metadata.get("source", ""))
            if with_images:
                report = report + self.index_markdown_with_images(source, doc.page_content)
            else:
                report = report + IndexReport(text_count=self.index_markdown(source, doc.page_content))
        logger.info(
            "Indexed %d notes from %s (%d text chunks, %d images)",
            len(documents),
            root,
            report.text_count,
            report.image_count,
        )
        return report

    # -- internals ------------------------------------------------------------

    def _text_points(self, path: str, content: str) -> list[IndexPoint]:
        chunks = chunk_markdown(
            content,
            max_bytes=self.max_chunk_bytes,
            split_threshold=self.split_threshold_bytes,
        )
        if not chunks:
            return []
        vectors = embed_texts(self._embeddings, [c.content for c in chunks], self.batch_size)
        return [
            IndexPoint(path=path, content=chunk.content, point_type=PointType.TEXT, embedding=vector)
            for chunk, vector in zip(chunks, vectors)
        ]
