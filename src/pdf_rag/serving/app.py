"""FastAPI application exposing ingestion and question answering over HTTP."""

from __future__ import annotations

import logging
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import Body, FastAPI, File, Request, UploadFile
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel

from pdf_rag.config import Settings, settings
from pdf_rag.exceptions import GenerationError, IngestError, RetrieveError
from pdf_rag.generation.generator import AnswerGenerator
from pdf_rag.ingestion.embedder import get_embedding_function
from pdf_rag.ingestion.ingestor import DocumentIngestor
from pdf_rag.retrieval.memory_store import InMemoryVectorStore
from pdf_rag.retrieval.retriever import SemanticRetriever

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from langchain_core.embeddings import Embeddings
    from langchain_core.language_models import BaseChatModel

    from pdf_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)

_COPY_BLOCK = 1024 * 1024


# ── Request / Response schemas ────────────────────────────────────────
class QueryRequest(BaseModel):
    """Incoming question from the user."""

    question: str | None = None


class SourceRecord(BaseModel):
    """One retrieved chunk cited in an answer."""

    source: str
    chunk: int
    text: str


class QueryResponse(BaseModel):
    """Answer together with the chunks it was generated from."""

    answer: str
    sources: list[SourceRecord] = []


class UploadResponse(BaseModel):
    success: bool
    filename: str
    chunks: int


class DocumentRecord(BaseModel):
    source: str
    chunk: int
    content: str


def _error(status_code: int, error: str, **extra: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


def create_app(
    cfg: Settings = settings,
    *,
    store: VectorStoreBase | None = None,
    embeddings: Embeddings | None = None,
    llm: BaseChatModel | None = None,
) -> FastAPI:
    """Build the application and wire the pipeline components.

    Components not passed in are created from *cfg*. The store lives as
    long as the application.
    """
    store = store if store is not None else InMemoryVectorStore()
    embeddings = embeddings if embeddings is not None else get_embedding_function(cfg)
    ingestor = DocumentIngestor(
        store, embeddings, chunk_size=cfg.chunk_size, chunk_overlap=cfg.chunk_overlap
    )
    retriever = SemanticRetriever(store, embeddings, default_k=cfg.retrieval_k)
    generator = AnswerGenerator(llm, cfg)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("Bootstrap started")
        logger.info("HF_TOKEN: %s", "present" if cfg.hf_token else "missing")
        logger.info("GROQ_API_KEY: %s", "present" if cfg.groq_api_key else "missing")
        counts = ingestor.ingest_directory(cfg.data_dir)
        logger.info("Bootstrap ingested %d file(s); store holds %d chunk(s)", len(counts), len(store))
        yield

    app = FastAPI(
        title="PDF RAG API",
        version="0.1.0",
        description="Upload PDFs and ask questions answered from their content.",
        lifespan=lifespan,
    )
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        # Malformed /query bodies are answered like a missing question.
        if request.url.path == "/query":
            return _error(400, "Question is required")
        return await request_validation_exception_handler(request, exc)

    # ── Routes ────────────────────────────────────────────────────────
    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok"}

    @app.post("/query", response_model=QueryResponse)
    def query(request: QueryRequest | None = Body(default=None)):
        """Retrieve the most relevant chunks and generate an answer."""
        question = (request.question or "").strip() if request is not None else ""
        if not question:
            return _error(400, "Question is required")

        logger.info("Querying: %r", question)
        try:
            results = retriever.search(question)
            logger.info("Retrieved %d snippet(s)", len(results))
            chunks = [r.chunk for r in results]
            answer = generator.generate(chunks, question)
        except (RetrieveError, GenerationError):
            logger.exception("Query failed")
            return _error(500, "Query failed")

        return QueryResponse(
            answer=answer,
            sources=[SourceRecord(**c.to_source_record()) for c in chunks],
        )

    @app.post("/upload", response_model=UploadResponse)
    def upload(file: UploadFile | None = File(None)):
        """Store an uploaded PDF and ingest it."""
        if file is None or not file.filename:
            logger.error("Upload failed: no file uploaded")
            return _error(400, "No file uploaded")
        filename = Path(file.filename).name
        if not filename.lower().endswith(".pdf"):
            logger.error("Upload failed: %s is not a PDF", filename)
            return _error(400, "Only PDFs are supported")

        if file.size is not None and file.size > cfg.max_upload_bytes:
            logger.error("Upload failed: %s is %d bytes", filename, file.size)
            return _error(413, "File too large")

        upload_dir = Path(cfg.upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        size = 0
        with tempfile.NamedTemporaryFile(dir=upload_dir, suffix=".pdf", delete=False) as tmp:
            while block := file.file.read(_COPY_BLOCK):
                size += len(block)
                if size > cfg.max_upload_bytes:
                    break
                tmp.write(block)
        path = Path(tmp.name)
        if size > cfg.max_upload_bytes:
            path.unlink(missing_ok=True)
            logger.error("Upload failed: %s exceeds %d bytes", filename, cfg.max_upload_bytes)
            return _error(413, "File too large")
        logger.info("Upload received: %s (%d bytes)", filename, size)

        try:
            chunks = ingestor.ingest_pdf(path, filename)
        except IngestError as exc:
            logger.exception("PDF ingestion failed for %s", filename)
            return _error(500, "PDF ingestion failed", message=str(exc))
        finally:
            path.unlink(missing_ok=True)

        logger.info("Ingestion successful: %s (%d chunks)", filename, len(chunks))
        return UploadResponse(success=True, filename=filename, chunks=len(chunks))

    @app.get("/documents", response_model=list[DocumentRecord])
    def documents() -> list[DocumentRecord]:
        """Most recently ingested chunks, for the documents explorer."""
        return [
            DocumentRecord(source=c.source, chunk=c.chunk, content=c.content)
            for c in store.recent(cfg.documents_view_limit)
        ]

    # ── Frontend (single-page app) ────────────────────────────────────
    @app.get("/{full_path:path}", include_in_schema=False)
    def frontend(full_path: str):
        root = Path(cfg.frontend_dir).resolve()
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and root in candidate.parents:
            return FileResponse(candidate)
        index = root / "index.html"
        if index.is_file():
            return FileResponse(index)
        return PlainTextResponse("Frontend not found", status_code=404)

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn using the configured host and port."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
