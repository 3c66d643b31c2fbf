"""In-memory research session: one context, one status, one chat log.

The session is the caller the pipeline functions are designed for.  It owns
all mutable state; :func:`~urlqa.rag.ingestor.ingest_urls` and
:func:`~urlqa.rag.answer.answer_question` only receive values from it and
return result records.
"""

from __future__ import annotations

import logging
from typing import Sequence

from urlqa.errors import AlreadyProcessing, EmptyQuestion
from urlqa.rag.answer import answer_question
from urlqa.rag.ingestor import ingest_urls
from urlqa.rag.llm import GeminiClient
from urlqa.rag.models import ChatTurn, ContextState, IngestResult, LlmResponse, ProcessingStatus
from urlqa.scraper.fetcher import PageFetcher

logger = logging.getLogger(__name__)


class ResearchSession:
    """Hold the ingested context and the conversation about it.

    Args:
        client: LLM client used for every question.
        fetcher: Relay fetcher used for every ingestion.  ``None`` lets
            :func:`ingest_urls` build the configured default.
    """

    def __init__(
        self,
        client: GeminiClient,
        fetcher: PageFetcher | None = None,
    ) -> None:
        self.client = client
        self.fetcher = fetcher
        self.context = ContextState()
        self.status = ProcessingStatus.IDLE
        self._history: list[ChatTurn] = []

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def history(self) -> list[ChatTurn]:
        return list(self._history)

    @property
    def is_ready(self) -> bool:
        return self.context.is_ready

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------
    async def ingest(self, urls: Sequence[str]) -> IngestResult:
        """Replace the context with the pages behind *urls*.

        A failed batch keeps the previous content and metadata and records
        the error message on the context.  Only one batch may run at a time.
        """
        if self.context.is_processing:
            exc = AlreadyProcessing()
            return IngestResult(success=False, error=exc.message, error_kind=exc.kind)

        submitted = list(urls)
        self.context.urls = submitted
        self.context.is_processing = True
        self.context.error = None
        self.status = ProcessingStatus.PROCESSING

        try:
            result = await ingest_urls(submitted, fetcher=self.fetcher)
        finally:
            self.context.is_processing = False

        if result.success:
            self.context = ContextState(
                urls=submitted,
                content=result.content,
                metadata=list(result.metadata),
            )
            self.status = ProcessingStatus.SUCCESS
        else:
            self.context.error = result.error
            self.status = ProcessingStatus.ERROR
        return result

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------
    async def ask(self, question: str) -> LlmResponse:
        """Answer *question* and record both turns in the history.

        A blank question is rejected without touching the history.  Errors
        are recorded as an assistant turn prefixed with ``Error:``.
        """
        if not question or not question.strip():
            exc = EmptyQuestion()
            return LlmResponse(answer="", error=exc.message, error_kind=exc.kind)

        prior = list(self._history)
        self._history.append(ChatTurn.create("user", question))

        response = await answer_question(question, self.context.content, prior, self.client)

        content = f"Error: {response.error}" if response.error else response.answer
        self._history.append(ChatTurn.create("assistant", content))
        return response

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Discard context, status and chat history.

        An ingestion already in flight is not cancelled; it keeps the session
        busy and its result is still applied when it completes.
        """
        in_flight = self.context.is_processing
        self.context = ContextState(is_processing=in_flight)
        self.status = ProcessingStatus.PROCESSING if in_flight else ProcessingStatus.IDLE
        self._history.clear()
        logger.info("[session] reset")
