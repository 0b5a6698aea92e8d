"""Answer generation from retrieved chunks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pdf_rag.exceptions import GenerationError
from pdf_rag.generation.llm import get_llm
from pdf_rag.generation.prompts import build_rag_prompt

if TYPE_CHECKING:
    from collections.abc import Sequence

    from langchain_core.language_models import BaseChatModel

    from pdf_rag.config import Settings
    from pdf_rag.retrieval.models import Chunk

logger = logging.getLogger(__name__)


class AnswerGenerator:
    """Calls the chat model with the question and its context chunks.

    Parameters
    ----------
    llm:
        Chat model to use. When *None* it is built from settings on the
        first call to :meth:`generate`.
    cfg:
        Settings used to build the default model.
    """

    def __init__(self, llm: BaseChatModel | None = None, cfg: Settings | None = None) -> None:
        self._llm = llm
        self._cfg = cfg

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = get_llm(self._cfg) if self._cfg is not None else get_llm()
        return self._llm

    def generate(self, chunks: Sequence[Chunk], question: str) -> str:
        """Return the model's answer to *question* given *chunks* as context.

        Raises
        ------
        GenerationError
            If the provider call fails; the provider's message is kept.
        """
        messages = build_rag_prompt(question, chunks)
        logger.info("Generating answer from %d context chunk(s)", len(chunks))
        try:
            response = self.llm.invoke(messages)
        except Exception as exc:
            raise GenerationError(f"Completion request failed: {exc}") from exc

        content = response.content
        if not isinstance(content, str):
            # Multi-part content: keep only the text parts.
            content = "".join(
                part if isinstance(part, str) else part.get("text", "") for part in content
            )
        return content
