"""In-memory implementation of the document-store abstraction."""

from __future__ import annotations

import logging
import threading

import numpy as np

from pdf_rag.exceptions import DimensionMismatchError
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import Chunk

logger = logging.getLogger(__name__)


def cosine_scores(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of *query* against every row of *matrix*.

    Rows (or a query) with zero norm score 0.0 instead of NaN.
    """
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    scores = np.zeros(len(matrix), dtype=np.float64)
    nonzero = norms > 0
    scores[nonzero] = dots[nonzero] / norms[nonzero]
    return scores


class InMemoryVectorStore(VectorStoreBase):
    """Process-lifetime, append-only chunk store.

    Appends happen under a lock and readers work on a snapshot taken under
    the same lock, so concurrent ingestion never exposes a half-written
    list. All chunks share one embedding dimension, fixed by the first
    chunk added.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._chunks: list[Chunk] = []
        self._dimension: int | None = None

    @property
    def dimension(self) -> int | None:
        """Embedding dimension of the stored chunks (``None`` while empty)."""
        return self._dimension

    # -- VectorStoreBase overrides --------------------------------------------

    def add(self, chunk: Chunk) -> None:
        if not chunk.embedding:
            raise ValueError(f"Chunk {chunk.source}#{chunk.chunk} has an empty embedding")
        with self._lock:
            if self._dimension is None:
                self._dimension = chunk.dimension
                logger.debug("Store dimension fixed at %d", self._dimension)
            elif chunk.dimension != self._dimension:
                raise DimensionMismatchError(self._dimension, chunk.dimension)
            self._chunks.append(chunk)

    def all(self) -> list[Chunk]:
        with self._lock:
            return list(self._chunks)

    def recent(self, n: int) -> list[Chunk]:
        if n <= 0:
            return []
        with self._lock:
            return self._chunks[-n:]

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 5,
    ) -> list[tuple[Chunk, float]]:
        chunks = self.all()
        if not chunks or k < 1:
            return []
        if len(query_embedding) != chunks[0].dimension:
            raise DimensionMismatchError(chunks[0].dimension, len(query_embedding))

        matrix = np.asarray([c.embedding for c in chunks], dtype=np.float64)
        scores = cosine_scores(np.asarray(query_embedding, dtype=np.float64), matrix)
        # Stable sort keeps insertion order among equal scores.
        order = np.argsort(-scores, kind="stable")[:k]
        return [(chunks[i], float(scores[i])) for i in order]

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)
