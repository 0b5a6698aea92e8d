"""Unit tests for PDF loading and the document ingestor."""

from __future__ import annotations

import math
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from langchain_core.documents import Document

from pdf_rag.exceptions import IngestError
from pdf_rag.ingestion.ingestor import DocumentIngestor
from pdf_rag.ingestion.loader import load_pdf_text
from pdf_rag.retrieval.memory_store import InMemoryVectorStore


def _fake_loader(pages: list[str]) -> MagicMock:
    loader_cls = MagicMock()
    loader_cls.return_value.load.return_value = [
        Document(page_content=p, metadata={"page": i}) for i, p in enumerate(pages)
    ]
    return loader_cls


# ──────────────────────────────────────────────────────────────────────
# loader
# ──────────────────────────────────────────────────────────────────────


class TestLoader:
    def test_pages_joined_with_newline(self) -> None:
        with patch("pdf_rag.ingestion.loader.PyPDFLoader", _fake_loader(["page one", "page two"])):
            assert load_pdf_text("doc.pdf") == "page one\npage two"

    def test_extraction_failure_raises_ingest_error(self) -> None:
        loader_cls = MagicMock()
        loader_cls.return_value.load.side_effect = RuntimeError("EOF marker not found")
        with patch("pdf_rag.ingestion.loader.PyPDFLoader", loader_cls):
            with pytest.raises(IngestError, match="EOF marker not found"):
                load_pdf_text("broken.pdf")

    def test_missing_file_raises_ingest_error(self, tmp_path: Path) -> None:
        with pytest.raises(IngestError):
            load_pdf_text(tmp_path / "nope.pdf")


# ──────────────────────────────────────────────────────────────────────
# DocumentIngestor
# ──────────────────────────────────────────────────────────────────────


class TestDocumentIngestor:
    def test_ingest_text_indexes_from_zero(self, store: InMemoryVectorStore, make_embeddings) -> None:
        ingestor = DocumentIngestor(store, make_embeddings(), chunk_size=10, chunk_overlap=0)
        chunks = ingestor.ingest_text("a" * 45, "notes.pdf")
        assert [c.chunk for c in chunks] == [0, 1, 2, 3, 4]
        assert all(c.source == "notes.pdf" for c in chunks)
        assert store.all() == chunks

    def test_each_chunk_is_embedded_in_order(self, store: InMemoryVectorStore, make_embeddings) -> None:
        embeddings = make_embeddings()
        ingestor = DocumentIngestor(store, embeddings, chunk_size=3, chunk_overlap=1)
        ingestor.ingest_text("abcdefg", "x.pdf")
        assert embeddings.calls == ["abc", "cde", "efg"]

    def test_reingest_appends_duplicates(self, store: InMemoryVectorStore, make_embeddings) -> None:
        ingestor = DocumentIngestor(store, make_embeddings(), chunk_size=10)
        n = len(ingestor.ingest_text("b" * 30, "dup.pdf"))
        ingestor.ingest_text("b" * 30, "dup.pdf")
        assert len(store) == 2 * n

    def test_empty_text_stores_nothing(self, store: InMemoryVectorStore, make_embeddings) -> None:
        ingestor = DocumentIngestor(store, make_embeddings(), chunk_size=10)
        assert ingestor.ingest_text("", "empty.pdf") == []
        assert len(store) == 0

    def test_embedding_failure_keeps_earlier_chunks(
        self, store: InMemoryVectorStore, make_embeddings
    ) -> None:
        embeddings = make_embeddings(failing={"ccc"})
        ingestor = DocumentIngestor(store, embeddings, chunk_size=3)
        with pytest.raises(IngestError, match="chunk 2") as info:
            ingestor.ingest_text("aaabbbcccddd", "partial.pdf")
        assert info.value.source == "partial.pdf"
        assert [c.content for c in store.all()] == ["aaa", "bbb"]
        # Remaining chunks are not attempted.
        assert "ddd" not in embeddings.calls

    def test_provider_switch_raises_ingest_error(
        self, store: InMemoryVectorStore, make_embeddings
    ) -> None:
        DocumentIngestor(store, make_embeddings(default=[1.0, 0.0]), chunk_size=5).ingest_text(
            "hello", "a.pdf"
        )
        other = DocumentIngestor(store, make_embeddings(default=[1.0, 0.0, 0.0]), chunk_size=5)
        with pytest.raises(IngestError, match="dimension mismatch"):
            other.ingest_text("world", "b.pdf")
        assert len(store) == 1

    def test_two_page_pdf_chunk_count(self, store: InMemoryVectorStore, make_embeddings) -> None:
        pages = ["First page. " * 40, "Second page text. " * 30]
        text = "\n".join(pages)
        ingestor = DocumentIngestor(store, make_embeddings(), chunk_size=100, chunk_overlap=0)
        with patch("pdf_rag.ingestion.loader.PyPDFLoader", _fake_loader(pages)):
            chunks = ingestor.ingest_pdf("/tmp/report.pdf")
        assert len(chunks) == math.ceil(len(text) / 100)
        assert "".join(c.content for c in chunks) == text
        assert {c.source for c in chunks} == {"report.pdf"}

    def test_ingest_pdf_custom_source_label(self, store: InMemoryVectorStore, make_embeddings) -> None:
        ingestor = DocumentIngestor(store, make_embeddings(), chunk_size=100)
        with patch("pdf_rag.ingestion.loader.PyPDFLoader", _fake_loader(["text"])):
            chunks = ingestor.ingest_pdf("/tmp/upload-1234.pdf", "Original Name.pdf")
        assert chunks[0].source == "Original Name.pdf"

    def test_ingest_pdf_extraction_failure_labels_source(
        self, store: InMemoryVectorStore, make_embeddings
    ) -> None:
        loader_cls = MagicMock()
        loader_cls.return_value.load.side_effect = RuntimeError("encrypted")
        ingestor = DocumentIngestor(store, make_embeddings())
        with patch("pdf_rag.ingestion.loader.PyPDFLoader", loader_cls):
            with pytest.raises(IngestError) as info:
                ingestor.ingest_pdf("/tmp/tmp123.pdf", "secret.pdf")
        assert info.value.source == "secret.pdf"
        assert "secret.pdf" in str(info.value)
        assert "encrypted" in str(info.value)
        assert "tmp123" not in str(info.value)

    def test_ingest_directory(self, tmp_path: Path, store: InMemoryVectorStore, make_embeddings) -> None:
        for name in ("b.pdf", "a.pdf", "bad.pdf", "notes.txt"):
            (tmp_path / name).write_bytes(b"%PDF-1.4")

        def loader_for(path: str) -> MagicMock:
            loader = MagicMock()
            if path.endswith("bad.pdf"):
                loader.load.side_effect = RuntimeError("corrupt")
            else:
                loader.load.return_value = [Document(page_content=f"text of {Path(path).name}")]
            return loader

        ingestor = DocumentIngestor(store, make_embeddings(), chunk_size=1000)
        with patch("pdf_rag.ingestion.loader.PyPDFLoader", side_effect=loader_for):
            counts = ingestor.ingest_directory(tmp_path)

        assert counts == {"a.pdf": 1, "b.pdf": 1}
        assert [c.source for c in store.all()] == ["a.pdf", "b.pdf"]

    def test_ingest_missing_directory(self, tmp_path: Path, store: InMemoryVectorStore, make_embeddings) -> None:
        ingestor = DocumentIngestor(store, make_embeddings())
        assert ingestor.ingest_directory(tmp_path / "missing") == {}
