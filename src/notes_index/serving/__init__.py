"""
Serving — FastAPI application for indexing and searching notes.

The app is a thin translation layer: requests are turned into calls on
:class:`~notes_index.ingestion.indexer.NoteIndexer`,
:class:`~notes_index.retrieval.retriever.SemanticRetriever` and the
vector store, all supplied through FastAPI dependencies.
"""
