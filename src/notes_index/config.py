"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "obsidian_notes"

    # Embedding
    embedding_backend: str = Field(
        default="huggingface",
        description="Embedding provider: 'huggingface' (local sentence-transformers) or 'ollama'.",
    )
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    ollama_base_url: str = "http://localhost:11434"
    embed_batch_size: int = 32

    # Chunking
    max_chunk_bytes: int = Field(default=800, description="Target maximum UTF-8 size of a split part")
    split_threshold_bytes: int = Field(
        default=850,
        description="Heading sections larger than this are re-split into parts of max_chunk_bytes",
    )

    # Image indexing
    image_context_mode: str = Field(
        default="section",
        description="'section' indexes the whole enclosing heading section, 'window' a fixed character window",
    )
    image_context_chars: int = 200

    # Serving
    api_host: str = "0.0.0.0"
    api_port: int = 37337
    cors_allow_origins: list[str] = ["*"]

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
