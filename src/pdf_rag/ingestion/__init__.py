"""
Ingestion — PDF loading, chunking, and embedding into the document store.

This module converts raw PDF documents into embedded :class:`Chunk`
records appended to an in-memory store.
"""

from pdf_rag.ingestion.chunker import chunk_documents, split_text
from pdf_rag.ingestion.embedder import (
    HuggingFaceInferenceEmbeddings,
    OllamaEmbeddings,
    get_embedding_function,
)
from pdf_rag.ingestion.ingestor import DocumentIngestor

__all__ = [
    "DocumentIngestor",
    "HuggingFaceInferenceEmbeddings",
    "OllamaEmbeddings",
    "chunk_documents",
    "get_embedding_function",
    "split_text",
]
