"""LLM initialisation — single place to swap providers.

Supports three modes, all through ``ChatOpenAI``:

1. **Groq** — set ``GROQ_API_KEY``; Groq exposes an OpenAI-compatible API.
2. **Local server** (default) — ``LLM_BASE_URL`` points at an
   OpenAI-compatible endpoint such as Ollama's ``/v1``.
3. **OpenAI cloud** — clear ``LLM_BASE_URL`` and set ``OPENAI_API_KEY``.
"""

from __future__ import annotations

import logging

from langchain_openai import ChatOpenAI

from pdf_rag.config import Settings, settings

logger = logging.getLogger(__name__)


def get_llm(cfg: Settings = settings, temperature: float | None = None) -> ChatOpenAI:
    """Return the configured chat model.

    A dummy API key (``"EMPTY"``) is used for a local server because it
    does not authenticate but the client requires a non-empty value.
    """
    kwargs: dict = {
        "temperature": cfg.llm_temperature if temperature is None else temperature,
        "timeout": cfg.llm_timeout,
    }

    if cfg.groq_api_key:
        logger.info("Using Groq endpoint with model %s", cfg.groq_model_name)
        kwargs.update(model=cfg.groq_model_name, base_url=cfg.groq_base_url, api_key=cfg.groq_api_key)
    elif cfg.llm_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", cfg.llm_base_url)
        kwargs.update(
            model=cfg.llm_model_name,
            base_url=cfg.llm_base_url,
            api_key=cfg.openai_api_key or "EMPTY",
        )
    else:
        kwargs.update(model=cfg.llm_model_name, api_key=cfg.openai_api_key)

    return ChatOpenAI(**kwargs)
