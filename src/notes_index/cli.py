"""notes-index CLI — run the API server and index a vault from the shell."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from notes_index.config import settings
from notes_index.errors import NotesIndexError


@click.group()
@click.option("--log-level", default=settings.log_level, show_default=True, help="Root logging level")
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Semantic indexing for Markdown notes."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.lower()
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--host", default=settings.api_host, show_default=True, help="Bind address")
@click.option("--port", default=settings.api_port, show_default=True, type=int, help="Bind port")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Start the HTTP API."""
    import uvicorn

    from notes_index.serving.app import app

    click.echo(f"Serving on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=ctx.obj["log_level"])


@cli.command()
@click.argument("vault", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--glob", "glob_pattern", default="**/*.md", show_default=True, help="Note file pattern")
@click.option("--with-images", is_flag=True, help="Also index image references by their context")
def ingest(vault: Path, glob_pattern: str, with_images: bool) -> None:
    """Index every note in VAULT."""
    from notes_index.ingestion.embedder import get_embedding_function
    from notes_index.ingestion.indexer import NoteIndexer
    from notes_index.retrieval.chroma_store import ChromaVectorStore

    try:
        indexer = NoteIndexer(ChromaVectorStore(), get_embedding_function())
        report = indexer.index_directory(vault, glob_pattern, with_images=with_images)
    except NotesIndexError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Indexed {report.text_count} text chunks and {report.image_count} images")


@cli.command()
def stats() -> None:
    """Show collection statistics."""
    from notes_index.retrieval.chroma_store import ChromaVectorStore

    try:
        collection = ChromaVectorStore().stats()
    except NotesIndexError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"{collection.collection_name}: {collection.total_points} points")


if __name__ == "__main__":
    cli()
