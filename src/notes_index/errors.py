"""Exception hierarchy for the indexing service.

The segmentation core never raises; these errors originate in the
collaborators around it (embedding backends, the vector store, settings).
"""


class NotesIndexError(Exception):
    """Base exception for all notes-index errors."""


class ConfigurationError(NotesIndexError):
    """Raised when a setting holds a value the service cannot act on.

    Attributes:
        field: Name of the offending setting
        message: Human-readable description of the problem
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class EmbeddingError(NotesIndexError):
    """Raised when the embedding backend fails or is unreachable."""


class VectorStoreError(NotesIndexError):
    """Raised when the vector store rejects or cannot serve a request."""
