"""
Retrieval — in-memory document store and cosine-similarity search.

Public surface
--------------
- :class:`SemanticRetriever` — main entry point for top-k retrieval.
- :class:`VectorStoreBase` — abstract store (subclass for other backends).
- :class:`InMemoryVectorStore` — default process-lifetime store.
- :class:`Chunk`, :class:`RetrievalResult` — data models.
"""

from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.memory_store import InMemoryVectorStore
from pdf_rag.retrieval.models import Chunk, RetrievalResult
from pdf_rag.retrieval.retriever import SemanticRetriever

__all__ = [
    "Chunk",
    "InMemoryVectorStore",
    "RetrievalResult",
    "SemanticRetriever",
    "VectorStoreBase",
]
