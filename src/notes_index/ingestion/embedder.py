"""Embedding backends — thin wrappers around LangChain embedding classes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from notes_index.config import settings
from notes_index.errors import ConfigurationError, EmbeddingError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("huggingface", "ollama")


def get_embedding_function(backend: str | None = None, model: str | None = None) -> Embeddings:
    """Return the configured embedding function.

    ``huggingface`` runs a sentence-transformer locally; ``ollama`` calls
    the Ollama server at ``settings.ollama_base_url``.
    """
    backend = backend or settings.embedding_backend
    model = model or settings.embedding_model

    if backend == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=model)
    if backend == "ollama":
        from langchain_community.embeddings import OllamaEmbeddings

        logger.info("Using Ollama embeddings at %s (model=%s)", settings.ollama_base_url, model)
        return OllamaEmbeddings(base_url=settings.ollama_base_url, model=model)

    raise ConfigurationError(
        "embedding_backend",
        f"unsupported backend {backend!r}; expected one of {', '.join(SUPPORTED_BACKENDS)}",
    )


def embed_texts(embeddings: Embeddings, texts: list[str], batch_size: int | None = None) -> list[list[float]]:
    """Embed *texts* in batches, returning vectors in input order.

    Raises
    ------
    EmbeddingError
        When the backend fails for any batch.
    """
    batch_size = batch_size or settings.embed_batch_size
    vectors: list[list[float]] = []
    for start in range(0, len(texts), batch_size):
        batch = texts[start : start + batch_size]
        try:
            vectors.extend(embeddings.embed_documents(batch))
        except Exception as exc:
            raise EmbeddingError(f"Embedding backend failed: {exc}") from exc
        logger.debug("embedded %d / %d", len(vectors), len(texts))
    return vectors


def embed_query(embeddings: Embeddings, text: str) -> list[float]:
    """Embed a single search query."""
    try:
        return embeddings.embed_query(text)
    except Exception as exc:
        raise EmbeddingError(f"Embedding backend failed: {exc}") from exc
