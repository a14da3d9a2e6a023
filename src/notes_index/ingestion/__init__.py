"""
Ingestion — Markdown segmentation, image context, and embedding.

The segmentation core (:mod:`~notes_index.ingestion.chunker` and
:mod:`~notes_index.ingestion.image_context`) is pure and has no
dependency on storage or network code; :class:`NoteIndexer` wires it
to an embedding backend and a vector store.

Public API
----------
- :func:`chunk_markdown` — split a note into heading-annotated chunks.
- :func:`extract_image_links` — find ``![[path]]`` / ``![alt](path)`` references.
- :func:`extract_context` — fixed character window around a byte offset.
- :func:`extract_section_context` — heading section enclosing a byte offset.
"""

from notes_index.ingestion.chunker import (
    MAX_CHUNK_BYTES,
    SECTION_SPLIT_THRESHOLD_BYTES,
    chunk_markdown,
    recursive_split,
)
from notes_index.ingestion.image_context import (
    extract_context,
    extract_image_links,
    extract_section_context,
)
from notes_index.ingestion.models import Chunk, Heading, ImageLink, ImageSyntax

__all__ = [
    "MAX_CHUNK_BYTES",
    "SECTION_SPLIT_THRESHOLD_BYTES",
    "Chunk",
    "Heading",
    "ImageLink",
    "ImageSyntax",
    "chunk_markdown",
    "extract_context",
    "extract_image_links",
    "extract_section_context",
    "recursive_split",
]
