"""Text chunking — fixed character windows with optional overlap."""

from __future__ import annotations

from langchain_core.documents import Document


def split_text(text: str, chunk_size: int = 1000, chunk_overlap: int = 0) -> list[str]:
    """Cut *text* into windows of at most *chunk_size* characters.

    Consecutive windows share exactly *chunk_overlap* characters, so
    dropping the first *chunk_overlap* characters of every window after
    the first and concatenating gives back *text* unchanged.

    Raises
    ------
    ValueError
        If ``chunk_size <= 0`` or the overlap is outside ``[0, chunk_size)``.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if not 0 <= chunk_overlap < chunk_size:
        raise ValueError(
            f"chunk_overlap ({chunk_overlap}) must be >= 0 and < chunk_size ({chunk_size})"
        )
    if not text:
        return []

    stride = chunk_size - chunk_overlap
    chunks: list[str] = []
    start = 0
    while True:
        chunks.append(text[start : start + chunk_size])
        if start + chunk_size >= len(text):
            return chunks
        start += stride


def chunk_documents(
    documents: list[Document],
    chunk_size: int = 1000,
    chunk_overlap: int = 0,
) -> list[Document]:
    """Split *documents* into smaller chunks for embedding.

    Parameters
    ----------
    documents:
        Source documents produced by a loader.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of overlapping characters between consecutive chunks.

    Returns
    -------
    list[Document]
        Chunked documents carrying the parent's metadata plus a
        ``chunk_index`` counted per parent document.
    """
    chunks: list[Document] = []
    for doc in documents:
        for idx, piece in enumerate(split_text(doc.page_content, chunk_size, chunk_overlap)):
            chunks.append(Document(page_content=piece, metadata={**doc.metadata, "chunk_index": idx}))
    return chunks
