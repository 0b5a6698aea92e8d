"""Prompt template for answer generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

if TYPE_CHECKING:
    from collections.abc import Sequence

    from langchain_core.messages import BaseMessage

    from pdf_rag.retrieval.models import Chunk

SYSTEM_PROMPT = """\
You are a helpful assistant that answers questions about the user's documents.
Answer using **only** the provided context. If the context does not contain
the answer, say that you don't know. Do NOT fabricate information.
"""


def format_context(chunks: Sequence[Chunk]) -> str:
    """Join chunk contents in the given order, separated by rules."""
    return "\n\n---\n\n".join(chunk.content for chunk in chunks)


def build_rag_prompt(question: str, chunks: Sequence[Chunk]) -> list[BaseMessage]:
    """Assemble the prompt messages for a retrieval-augmented generation call.

    Parameters
    ----------
    question:
        The user question.
    chunks:
        Retrieved context chunks, most relevant first.

    Returns
    -------
    list[BaseMessage]
        A list of LangChain message objects ready for ``.invoke()``.
    """
    user_msg = (
        f"Context:\n{format_context(chunks)}\n\n"
        f"Question: {question}\n\n"
        "Answer the question based only on the context above."
    )
    return [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=user_msg),
    ]
