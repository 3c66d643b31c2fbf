"""Result records and conversation state for ingestion and answering."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from urlqa.scraper.models import ScrapedPage, WebsiteMetadata

Role = Literal["user", "assistant"]


class ProcessingStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ChatTurn:
    """One message in the conversation.  Immutable once created."""

    id: str
    role: Role
    content: str
    timestamp: datetime

    @classmethod
    def create(cls, role: Role, content: str) -> "ChatTurn":
        return cls(
            id=uuid.uuid4().hex,
            role=role,
            content=content,
            timestamp=datetime.now(timezone.utc),
        )


@dataclass
class LlmResponse:
    """Answer to one question.  A non-empty ``error`` means ``answer`` is unused."""

    answer: str = ""
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return not self.error


@dataclass
class IngestResult:
    """Terminal result of one :func:`~urlqa.rag.ingestor.ingest_urls` call."""

    success: bool
    content: str = ""
    error: str | None = None
    error_kind: str | None = None
    urls: list[str] = field(default_factory=list)
    metadata: list[WebsiteMetadata] = field(default_factory=list)
    # Pages excluded from ``content``; informational only.
    failures: list[ScrapedPage] = field(default_factory=list)


@dataclass
class ContextState:
    urls: list[str] = field(default_factory=list)
    content: str = ""
    is_processing: bool = False
    error: str | None = None
    metadata: list[WebsiteMetadata] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        """Only a non-empty context can be questioned."""
        return self.content != ""
