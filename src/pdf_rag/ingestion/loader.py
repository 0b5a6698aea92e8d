"""PDF loading — thin wrapper around LangChain's ``PyPDFLoader``."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from langchain_community.document_loaders import PyPDFLoader

from pdf_rag.exceptions import IngestError

if TYPE_CHECKING:
    from langchain_core.documents import Document


def load_pdf(path: str | Path) -> list[Document]:
    """Load a single PDF file, one ``Document`` per page.

    Raises
    ------
    IngestError
        If the file is missing or text extraction fails.
    """
    try:
        return PyPDFLoader(str(path)).load()
    except Exception as exc:
        raise IngestError(f"Failed to extract text from {path}: {exc}", source=str(path)) from exc


def load_pdf_text(path: str | Path) -> str:
    """Return the text of every page of *path* joined by newlines."""
    return "\n".join(page.page_content for page in load_pdf(path))
