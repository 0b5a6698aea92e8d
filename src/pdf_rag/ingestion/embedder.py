"""Embedding providers — hosted Hugging Face inference or a local Ollama server.

Both providers implement LangChain's :class:`~langchain_core.embeddings.Embeddings`
interface and issue exactly one HTTP request per text. Failures surface as
:class:`~pdf_rag.exceptions.EmbeddingError`; there is no retry and no
fallback to the other provider.
"""

from __future__ import annotations

import json
import logging
from numbers import Real
from typing import Any

import requests
from langchain_core.embeddings import Embeddings

from pdf_rag.config import Settings, settings
from pdf_rag.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


def _as_vector(payload: Any, provider: str) -> list[float]:
    """Validate that *payload* is a non-empty flat list of numbers."""
    if (
        not isinstance(payload, list)
        or not payload
        or not all(isinstance(v, Real) and not isinstance(v, bool) for v in payload)
    ):
        raise EmbeddingError(
            f"{provider} returned an unexpected embedding payload: {str(payload)[:200]}",
            provider=provider,
        )
    return [float(v) for v in payload]


class _HTTPEmbeddings(Embeddings):
    """Shared plumbing for the request/response embedding providers."""

    provider = "embedding"

    def __init__(self, *, timeout: float | None = None, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self._session = session or requests.Session()

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]

    def _post(self, url: str, payload: dict[str, Any], headers: dict[str, str] | None = None) -> requests.Response:
        try:
            return self._session.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise EmbeddingError(
                f"{self.provider} embedding request failed: {exc}", provider=self.provider
            ) from exc

    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise EmbeddingError(
                f"{self.provider} returned a non-JSON body: {response.text[:200]}",
                provider=self.provider,
                status_code=response.status_code,
            ) from exc


class HuggingFaceInferenceEmbeddings(_HTTPEmbeddings):
    """Hosted feature-extraction endpoint with bearer-token auth.

    Parameters
    ----------
    token:
        Hugging Face API token.
    url:
        Feature-extraction pipeline URL for the embedding model.
    """

    provider = "huggingface"

    def __init__(
        self,
        token: str,
        url: str = settings.hf_embedding_url,
        *,
        timeout: float | None = settings.embedding_timeout,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(timeout=timeout, session=session)
        self._token = token
        self.url = url

    def embed_query(self, text: str) -> list[float]:
        logger.debug("Generating embedding via Hugging Face (%d chars)", len(text))
        response = self._post(
            self.url,
            # Block server-side until a cold model has loaded.
            {"inputs": text, "options": {"wait_for_model": True}},
            headers={"Authorization": f"Bearer {self._token}"},
        )
        if not response.ok:
            raise EmbeddingError(
                f"Hugging Face embedding failed: {response.status_code} "
                f"{response.reason} - {response.text}",
                provider=self.provider,
                status_code=response.status_code,
            )

        result = self._json(response)
        if isinstance(result, dict) and "error" in result:
            raise EmbeddingError(
                f"Hugging Face API error: {json.dumps(result['error'])}",
                provider=self.provider,
                status_code=response.status_code,
            )
        # A single input may come back wrapped as [[...]].
        if isinstance(result, list) and result and isinstance(result[0], list):
            result = result[0]
        return _as_vector(result, self.provider)


class OllamaEmbeddings(_HTTPEmbeddings):
    """Local inference server exposing ``/api/embeddings``.

    Parameters
    ----------
    host:
        Base URL of the Ollama server.
    model:
        Embedding model name served by Ollama.
    """

    provider = "ollama"

    def __init__(
        self,
        host: str = settings.ollama_host,
        model: str = settings.ollama_embedding_model,
        *,
        timeout: float | None = settings.embedding_timeout,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(timeout=timeout, session=session)
        self.url = f"{host.rstrip('/')}/api/embeddings"
        self.model = model

    def embed_query(self, text: str) -> list[float]:
        logger.debug("Generating embedding via Ollama model=%s (%d chars)", self.model, len(text))
        response = self._post(self.url, {"model": self.model, "prompt": text})
        if not response.ok:
            raise EmbeddingError(
                "Ollama embedding request failed",
                provider=self.provider,
                status_code=response.status_code,
            )

        data = self._json(response)
        if not isinstance(data, dict) or "embedding" not in data:
            raise EmbeddingError(
                "Ollama response has no 'embedding' field", provider=self.provider
            )
        return _as_vector(data["embedding"], self.provider)


def get_embedding_function(
    cfg: Settings = settings,
    *,
    session: requests.Session | None = None,
) -> Embeddings:
    """Return the embedding provider selected by *cfg*.

    The hosted provider is used whenever a Hugging Face token is
    configured; otherwise the local Ollama server.
    """
    if cfg.hf_token:
        logger.info("Embeddings: Hugging Face inference API")
        return HuggingFaceInferenceEmbeddings(
            cfg.hf_token,
            cfg.hf_embedding_url,
            timeout=cfg.embedding_timeout,
            session=session,
        )
    logger.info("Embeddings: Ollama at %s (model=%s)", cfg.ollama_host, cfg.ollama_embedding_model)
    return OllamaEmbeddings(
        cfg.ollama_host,
        cfg.ollama_embedding_model,
        timeout=cfg.embedding_timeout,
        session=session,
    )
