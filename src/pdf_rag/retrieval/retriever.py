"""Semantic retriever — embeds a question and ranks stored chunks.

Usage::

    from pdf_rag.retrieval import InMemoryVectorStore, SemanticRetriever
    from pdf_rag.ingestion.embedder import get_embedding_function

    retriever = SemanticRetriever(InMemoryVectorStore(), get_embedding_function())
    for r in retriever.search("What does the warranty cover?", k=3):
        print(r.short_ref(), r.chunk.content[:80])
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pdf_rag.exceptions import DimensionMismatchError, EmbeddingError, RetrieveError
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import RetrievalResult

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class SemanticRetriever:
    """Top-k cosine retrieval over a :class:`VectorStoreBase`.

    Parameters
    ----------
    store:
        The document store searched at query time.
    embeddings:
        Embedding function used for the query. It must be the same
        provider that embedded the stored chunks.
    default_k:
        Default number of results returned by :meth:`search`.
    score_threshold:
        Optional minimum similarity; results below it are discarded.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embeddings: Embeddings,
        *,
        default_k: int = 3,
        score_threshold: float | None = None,
    ) -> None:
        self._store = store
        self._embeddings = embeddings
        self.default_k = default_k
        self.score_threshold = score_threshold

    # -- public API -----------------------------------------------------------

    def search(self, query: str, *, k: int | None = None) -> list[RetrievalResult]:
        """Embed *query* and return the *k* most similar chunks.

        Raises
        ------
        RetrieveError
            If the query cannot be embedded or its dimension does not
            match the stored chunks.
        """
        k = self._resolve_k(k)
        if len(self._store) == 0:
            logger.info("Store is empty; nothing to retrieve")
            return []

        try:
            embedding = self._embeddings.embed_query(query)
        except EmbeddingError as exc:
            raise RetrieveError(f"Failed to embed query: {exc}") from exc
        return self.search_by_embedding(embedding, k=k)

    def search_by_embedding(
        self,
        embedding: list[float],
        *,
        k: int | None = None,
    ) -> list[RetrievalResult]:
        """Same as :meth:`search` but accepts a pre-computed embedding."""
        k = self._resolve_k(k)
        try:
            hits = self._store.similarity_search(embedding, k=k)
        except DimensionMismatchError as exc:
            # A different provider embedded the stored chunks.
            raise RetrieveError(str(exc)) from exc

        results = [
            RetrievalResult(chunk=chunk, score=score)
            for chunk, score in hits
            if self.score_threshold is None or score >= self.score_threshold
        ]
        logger.debug("Retrieved %s", [r.short_ref() for r in results])
        return results

    # -- internals ------------------------------------------------------------

    def _resolve_k(self, k: int | None) -> int:
        k = self.default_k if k is None else k
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")
        return k
