"""Note loaders — thin wrappers around LangChain document loaders."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from langchain_community.document_loaders import DirectoryLoader, TextLoader

if TYPE_CHECKING:
    from langchain_core.documents import Document


def load_notes(path: str | Path, glob: str = "**/*.md") -> list[Document]:
    """Recursively load all Markdown notes below *path*.

    Parameters
    ----------
    path:
        Vault root directory.
    glob:
        File-matching pattern forwarded to ``DirectoryLoader``.

    Returns
    -------
    list[Document]
        One ``Document`` per note; ``metadata["source"]`` is the file path.
    """
    loader = DirectoryLoader(
        str(path),
        glob=glob,
        loader_cls=TextLoader,  # type: ignore[arg-type]
        loader_kwargs={"encoding": "utf-8"},
        show_progress=False,
    )
    return loader.load()
