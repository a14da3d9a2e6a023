"""Unit tests for the notes-index CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from notes_index.cli import cli
from notes_index.errors import VectorStoreError
from notes_index.serving.app import app


def test_ingest_indexes_vault(tmp_path: Path, fake_store, fake_embeddings) -> None:
    (tmp_path / "trip.md").write_text("# Trip\n\n![[paris.jpg]]\n\n## Day 2\n\nLouvre\n", encoding="utf-8")

    with (
        patch("notes_index.retrieval.chroma_store.ChromaVectorStore", return_value=fake_store),
        patch("notes_index.ingestion.embedder.get_embedding_function", return_value=fake_embeddings),
    ):
        result = CliRunner().invoke(cli, ["ingest", str(tmp_path), "--with-images"])

    assert result.exit_code == 0, result.output
    assert "Indexed 2 text chunks and 1 images" in result.output
    assert {p.path for p in fake_store.points} == {str(tmp_path / "trip.md"), "paris.jpg"}


def test_ingest_reports_store_errors(tmp_path: Path) -> None:
    with patch(
        "notes_index.retrieval.chroma_store.ChromaVectorStore",
        side_effect=VectorStoreError("Cannot open Chroma collection 'obsidian_notes'"),
    ):
        result = CliRunner().invoke(cli, ["ingest", str(tmp_path)])

    assert result.exit_code == 1
    assert "Cannot open Chroma collection" in result.output


def test_ingest_requires_existing_directory(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["ingest", str(tmp_path / "missing")])
    assert result.exit_code == 2


def test_stats(fake_store) -> None:
    with patch("notes_index.retrieval.chroma_store.ChromaVectorStore", return_value=fake_store):
        result = CliRunner().invoke(cli, ["stats"])

    assert result.exit_code == 0
    assert "test-collection: 0 points" in result.output


def test_serve_runs_uvicorn() -> None:
    with patch("uvicorn.run") as run:
        result = CliRunner().invoke(cli, ["--log-level", "DEBUG", "serve", "--port", "9000"])

    assert result.exit_code == 0, result.output
    assert run.call_args.kwargs == {"host": "0.0.0.0", "port": 9000, "log_level": "debug"}
    assert run.call_args.args[0] is app


def test_serve_help() -> None:
    result = CliRunner().invoke(cli, ["serve", "--help"])
    assert result.exit_code == 0
    assert "--port" in result.output
