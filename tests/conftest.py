"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from langchain_core.embeddings import Embeddings

from pdf_rag.exceptions import EmbeddingError
from pdf_rag.retrieval.memory_store import InMemoryVectorStore


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


class MappingEmbeddings(Embeddings):
    """Deterministic fake: known texts map to fixed vectors.

    Unknown texts get *default*; texts listed in *failing* raise
    :class:`EmbeddingError`.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        *,
        default: list[float] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default if default is not None else [1.0, 0.0]
        self.failing = failing or set()
        self.calls: list[str] = []

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        if text in self.failing:
            raise EmbeddingError("model loading", provider="fake", status_code=503)
        return list(self.vectors.get(text, self.default))

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(t) for t in texts]


@pytest.fixture()
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def make_embeddings() -> Callable[..., MappingEmbeddings]:
    return MappingEmbeddings
