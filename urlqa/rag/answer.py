"""Question answering over an ingested context.

``answer_question`` is the boundary the presentation layer calls: it checks
its inputs before any network activity, delegates to the prompt builder and
LLM client, and converts every failure into :class:`LlmResponse.error`.
"""

from __future__ import annotations

import logging
from typing import Sequence

from urlqa.errors import EmptyQuestion, NoContext, UnknownError, UrlQaError
from urlqa.rag.llm import GeminiClient
from urlqa.rag.models import ChatTurn, LlmResponse
from urlqa.rag.prompt import build_prompt, format_chat_history

logger = logging.getLogger(__name__)

_UNEXPECTED_MESSAGE = "An error occurred while generating the answer. Please try again."


def _failure(exc: UrlQaError) -> LlmResponse:
    return LlmResponse(answer="", error=exc.message, error_kind=exc.kind)


async def answer_question(
    question: str,
    context: str,
    chat_history: Sequence[ChatTurn] = (),
    client: GeminiClient | None = None,
) -> LlmResponse:
    """Answer *question* from *context* only.

    Args:
        question: The user's new question.
        context: Concatenated page content produced by ingestion.
        chat_history: Earlier turns, oldest first.  The current question must
            not be included.
        client: LLM client; built from settings when omitted.

    Returns:
        An :class:`LlmResponse`.  Never raises for pipeline failures.
    """
    if not question or not question.strip():
        return _failure(EmptyQuestion())
    if not context or not context.strip():
        return _failure(NoContext())

    client = client or GeminiClient.from_settings()
    prompt = build_prompt(question, context, format_chat_history(chat_history))

    try:
        answer = await client.ask(prompt)
    except UrlQaError as exc:
        return _failure(exc)
    except Exception:  # noqa: BLE001
        logger.exception("[answer] unexpected failure")
        return _failure(UnknownError(_UNEXPECTED_MESSAGE))

    logger.info("[answer] ✓ answered with %d prior turn(s)", len(chat_history))
    return LlmResponse(answer=answer)
