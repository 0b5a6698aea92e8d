"""Domain models for stored chunks and retrieval results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """One embedded segment of a source document.

    Chunks are created during ingestion and never modified afterwards.

    Attributes
    ----------
    source:
        Identifier of the originating document (usually the file name).
    chunk:
        Ordinal position of the chunk within ``source``, starting at 0.
    content:
        Raw text of the chunk.
    embedding:
        Vector produced by the embedding provider active at ingestion time.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    chunk: int = Field(ge=0)
    content: str
    embedding: tuple[float, ...]

    @property
    def dimension(self) -> int:
        return len(self.embedding)

    def to_source_record(self) -> dict[str, object]:
        """Return the ``{source, chunk, text}`` record exposed to API clients."""
        return {"source": self.source, "chunk": self.chunk, "text": self.content}


class RetrievalResult(BaseModel):
    """A retrieved chunk together with its similarity to the query."""

    chunk: Chunk
    score: float

    def short_ref(self) -> str:
        """Return a compact ``[source§chunk]`` reference string."""
        return f"[{self.chunk.source}§{self.chunk.chunk}]"

    def __str__(self) -> str:  # noqa: D105
        return f"{self.short_ref()} {self.chunk.content[:120]}…"
