"""Ingestion and answering pipeline package."""

from urlqa.rag.answer import answer_question
from urlqa.rag.ingestor import ingest_urls
from urlqa.rag.llm import GeminiClient
from urlqa.rag.prompt import build_prompt, format_chat_history

__all__ = [
    "answer_question",
    "ingest_urls",
    "GeminiClient",
    "build_prompt",
    "format_chat_history",
]
