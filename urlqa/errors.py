"""Error taxonomy shared by the ingestion and answering pipelines.

Every failure the pipeline can report is a subclass of :class:`UrlQaError`.
Each class carries a stable ``kind`` name and a human-readable ``message``
suitable for direct display.  Lower layers raise these; the public entry
points (:func:`urlqa.rag.ingestor.ingest_urls` and
:func:`urlqa.rag.answer.answer_question`) catch them and return result
records instead.
"""

from __future__ import annotations


class UrlQaError(Exception):
    """Base class for every reportable pipeline failure."""

    kind: str = "UrlQaError"
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------

class NoValidUrls(UrlQaError):
    kind = "NoValidUrls"
    default_message = "Please enter at least one valid URL"


class InvalidUrlFormat(UrlQaError):
    """One or more entries could not be parsed as absolute URLs."""

    kind = "InvalidUrlFormat"

    def __init__(self, offenders: list[str]) -> None:
        self.offenders = list(offenders)
        super().__init__(f"Invalid URL format: {', '.join(self.offenders)}")


class FetchError(UrlQaError):
    """Every proxy strategy failed for a single page."""

    kind = "FetchError"

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch content from {url}: {reason}")


class AllScrapesFailed(UrlQaError):
    kind = "AllScrapesFailed"
    default_message = (
        "Failed to scrape content from any of the provided URLs. "
        "Try URLs from different domains."
    )


class AlreadyProcessing(UrlQaError):
    kind = "AlreadyProcessing"
    default_message = "URLs are already being processed. Please wait for the current batch."


# ---------------------------------------------------------------------------
# LLM client
# ---------------------------------------------------------------------------

class LlmError(UrlQaError):
    """Base class for failures raised by the LLM client."""

    kind = "LlmError"


class MissingCredential(LlmError):
    kind = "MissingCredential"
    default_message = "Gemini API key is not configured"


class RemoteError(LlmError):
    kind = "RemoteError"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class MalformedResponse(LlmError):
    kind = "MalformedResponse"
    default_message = "The model returned a response without any generated text"


class UnknownError(UrlQaError):
    kind = "UnknownError"


# ---------------------------------------------------------------------------
# Question answering
# ---------------------------------------------------------------------------

class EmptyQuestion(UrlQaError):
    kind = "EmptyQuestion"
    default_message = "Please enter a question"


class NoContext(UrlQaError):
    kind = "NoContext"
    default_message = "No context available. Please ingest at least one URL first."
