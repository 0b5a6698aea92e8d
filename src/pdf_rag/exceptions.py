"""Error taxonomy for the retrieval pipeline.

Every error is propagated to the immediate caller; nothing here is
retried. Wrapping errors keep the upstream exception as ``__cause__``.
"""

from __future__ import annotations


class RagError(Exception):
    """Base class for all pipeline errors."""


class EmbeddingError(RagError):
    """Raised when an embedding provider fails or returns a malformed body."""

    def __init__(self, message: str, *, provider: str, status_code: int | None = None) -> None:
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)


class IngestError(RagError):
    """Raised when a document cannot be extracted or its chunks cannot be embedded."""

    def __init__(self, message: str, *, source: str) -> None:
        self.source = source
        super().__init__(message)


class RetrieveError(RagError):
    """Raised when a query cannot be embedded or compared against the store."""


class GenerationError(RagError):
    """Raised when the completion provider fails."""


class DimensionMismatchError(RagError, ValueError):
    """Raised when an embedding does not match the store's dimensionality."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Embedding dimension mismatch: expected {expected}, got {actual}")
