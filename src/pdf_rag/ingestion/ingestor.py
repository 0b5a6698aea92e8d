"""Document ingestion — turn PDF text into embedded chunks in the store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from langchain_core.documents import Document

from pdf_rag.exceptions import DimensionMismatchError, EmbeddingError, IngestError
from pdf_rag.ingestion.chunker import chunk_documents
from pdf_rag.ingestion.loader import load_pdf_text
from pdf_rag.retrieval.models import Chunk

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from pdf_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


class DocumentIngestor:
    """Turns documents into embedded :class:`Chunk` records.

    Chunks of one document are embedded one at a time, in order, and each
    is appended as soon as its embedding succeeds. If an embedding call
    fails the remaining chunks are skipped; chunks already appended stay
    in the store.

    Parameters
    ----------
    store:
        Destination store.
    embeddings:
        Embedding provider used for every chunk.
    chunk_size:
        Maximum characters per chunk.
    chunk_overlap:
        Characters shared by consecutive chunks.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embeddings: Embeddings,
        *,
        chunk_size: int = 1000,
        chunk_overlap: int = 0,
    ) -> None:
        self._store = store
        self._embeddings = embeddings
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def ingest_text(self, text: str, source: str) -> list[Chunk]:
        """Chunk, embed and store *text* under the label *source*."""
        pieces = chunk_documents(
            [Document(page_content=text, metadata={"source": source})],
            chunk_size=self.chunk_size,
            chunk_overlap=self.chunk_overlap,
        )
        if not pieces:
            logger.warning("No text to ingest for %s", source)
            return []

        logger.info("Ingesting %s: %d chunk(s)", source, len(pieces))
        added: list[Chunk] = []
        for piece in pieces:
            index = piece.metadata["chunk_index"]
            try:
                embedding = self._embeddings.embed_query(piece.page_content)
            except EmbeddingError as exc:
                raise IngestError(
                    f"Embedding failed for {source} chunk {index} "
                    f"({len(added)}/{len(pieces)} stored): {exc}",
                    source=source,
                ) from exc
            chunk = Chunk(source=source, chunk=index, content=piece.page_content, embedding=embedding)
            try:
                self._store.add(chunk)
            except DimensionMismatchError as exc:
                raise IngestError(f"Cannot store {source} chunk {index}: {exc}", source=source) from exc
            added.append(chunk)
        return added

    def ingest_pdf(self, path: str | Path, source: str | None = None) -> list[Chunk]:
        """Extract the text of the PDF at *path* and ingest it.

        *source* defaults to the file name.
        """
        path = Path(path)
        source = source or path.name
        try:
            text = load_pdf_text(path)
        except IngestError as exc:
            # The message names the caller's label, not the on-disk path.
            detail = exc.__cause__ if exc.__cause__ is not None else exc
            raise IngestError(f"Failed to extract text from {source}: {detail}", source=source) from exc
        logger.info("Extracted %d characters from %s", len(text), source)
        return self.ingest_text(text, source)

    def ingest_directory(self, path: str | Path) -> dict[str, int]:
        """Ingest every ``*.pdf`` directly under *path*.

        A file that fails is logged and skipped so the remaining files are
        still ingested.

        Returns
        -------
        dict[str, int]
            Number of chunks stored per successfully ingested file.
        """
        directory = Path(path)
        if not directory.is_dir():
            logger.info("Data directory %s not found; skipping bootstrap ingest", directory)
            return {}

        counts: dict[str, int] = {}
        for pdf in sorted(directory.glob("*.pdf")):
            logger.info("Found PDF: %s", pdf.name)
            try:
                counts[pdf.name] = len(self.ingest_pdf(pdf))
            except IngestError:
                logger.exception("Failed to ingest %s", pdf.name)
        return counts
