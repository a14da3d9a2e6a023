"""Unit tests for the embedding helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from notes_index.errors import ConfigurationError, EmbeddingError
from notes_index.ingestion.embedder import embed_query, embed_texts, get_embedding_function


def test_unknown_backend_raises() -> None:
    with pytest.raises(ConfigurationError, match="embedding_backend"):
        get_embedding_function(backend="word2vec")


def test_huggingface_backend_uses_model_name() -> None:
    with patch("langchain_huggingface.HuggingFaceEmbeddings") as hf:
        get_embedding_function(backend="huggingface", model="BAAI/bge-small-en-v1.5")
    hf.assert_called_once_with(model_name="BAAI/bge-small-en-v1.5")


def test_embed_texts_batches_in_order(fake_embeddings) -> None:
    vectors = embed_texts(fake_embeddings, ["a", "bb", "ccc"], batch_size=2)
    assert vectors == [[1.0, 1.0], [2.0, 1.0], [3.0, 2.0]]
    assert fake_embeddings.calls == [["a", "bb"], ["ccc"]]


def test_embed_texts_empty(fake_embeddings) -> None:
    assert embed_texts(fake_embeddings, []) == []
    assert fake_embeddings.calls == []


def test_embed_query(fake_embeddings) -> None:
    assert embed_query(fake_embeddings, "tower") == [5.0, 0.0]


def test_failures_are_wrapped(failing_embeddings) -> None:
    with pytest.raises(EmbeddingError) as excinfo:
        embed_texts(failing_embeddings, ["a"])
    assert isinstance(excinfo.value.__cause__, ConnectionError)

    with pytest.raises(EmbeddingError):
        embed_query(failing_embeddings, "a")
