"""
Generation — prompt assembly and chat-model calls for answering questions.
"""

from pdf_rag.generation.generator import AnswerGenerator
from pdf_rag.generation.llm import get_llm
from pdf_rag.generation.prompts import build_rag_prompt

__all__ = ["AnswerGenerator", "build_rag_prompt", "get_llm"]
