"""Abstract base class for document-store backends.

The retrieval and ingestion layers only talk to :class:`VectorStoreBase`,
so an alternative backend only needs to implement the abstract methods
below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pdf_rag.retrieval.models import Chunk


class VectorStoreBase(ABC):
    """Append-only store of embedded chunks."""

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def add(self, chunk: Chunk) -> None:
        """Append *chunk*; the store never deduplicates or updates."""
        ...

    @abstractmethod
    def all(self) -> list[Chunk]:
        """Return every chunk in insertion order."""
        ...

    @abstractmethod
    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 5,
    ) -> list[tuple[Chunk, float]]:
        """Return up to *k* ``(chunk, score)`` pairs, best match first.

        Parameters
        ----------
        query_embedding:
            Dense vector for the query.
        k:
            Number of results to return.
        """
        ...

    # -- optional overrides ---------------------------------------------------

    def recent(self, n: int) -> list[Chunk]:
        """Return the last *n* chunks in insertion order."""
        if n <= 0:
            return []
        return self.all()[-n:]

    def health_check(self) -> bool:
        """Return ``True`` when the backend is ready."""
        return True

    def __len__(self) -> int:
        return len(self.all())
