"""Prompt construction for context-grounded answering."""

from __future__ import annotations

from typing import Iterable

from urlqa.rag.models import ChatTurn

REFUSAL = "I don't have enough information in the provided context to answer this question."

_PREAMBLE = (
    "You are a helpful assistant that answers questions based ONLY on the provided context.\n"
    f'If you don\'t know the answer based on the provided context, say "{REFUSAL}"\n'
    "Do not make up information or use prior knowledge outside of the provided context."
)

_CLOSING = (
    "Please provide a helpful, direct, and well-structured answer based only on "
    "the information in the provided context."
)

_ROLE_LABELS = {"user": "User", "assistant": "Assistant"}


def format_chat_history(turns: Iterable[ChatTurn]) -> str:
    """Render *turns* as ``User: …`` / ``Assistant: …`` lines, oldest first."""
    return "\n".join(f"{_ROLE_LABELS[t.role]}: {t.content}" for t in turns)


def build_prompt(question: str, context: str, chat_history: str = "") -> str:
    """Compose the full prompt sent to the model.

    The ``PREVIOUS CONVERSATION`` section is left out entirely when
    *chat_history* is empty.
    """
    sections = [_PREAMBLE, f"CONTEXT:\n{context}"]
    if chat_history:
        sections.append(f"PREVIOUS CONVERSATION:\n{chat_history}")
    sections.append(f"USER QUESTION: {question}")
    sections.append(_CLOSING)
    return "\n\n".join(sections)
