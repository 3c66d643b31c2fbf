"""Ingestion endpoints.

Routes
------
POST /ingest     Body: {"urls": ["https://...", "example.com"]}   → ingest
GET  /context    Current context, status and page metadata
POST /reset      Clear context and chat history
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response
from pydantic import BaseModel

from urlqa.errors import AllScrapesFailed, AlreadyProcessing, UnknownError
from urlqa.session import ResearchSession

router = APIRouter()

# Batch-level failures caused by the pages themselves rather than the input.
_UPSTREAM_KINDS = {AllScrapesFailed.kind, UnknownError.kind}


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class IngestRequest(BaseModel):
    urls: list[str]


class WebsiteMetadataOut(BaseModel):
    url: str
    title: str
    description: str
    last_scraped: datetime


class PageFailureOut(BaseModel):
    url: str
    error: str


class IngestResponse(BaseModel):
    urls: list[str]
    content: str
    metadata: list[WebsiteMetadataOut]
    failures: list[PageFailureOut]


class ContextOut(BaseModel):
    status: str
    ready: bool
    urls: list[str]
    content: str
    is_processing: bool
    error: str | None
    metadata: list[WebsiteMetadataOut]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _session(request: Request) -> ResearchSession:
    return request.app.state.session


def _metadata_out(items: list[Any]) -> list[WebsiteMetadataOut]:
    return [
        WebsiteMetadataOut(
            url=m.url,
            title=m.title,
            description=m.description,
            last_scraped=m.last_scraped,
        )
        for m in items
    ]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/ingest", response_model=IngestResponse)
async def ingest_endpoint(body: IngestRequest, request: Request) -> IngestResponse:
    """Scrape every URL and replace the session context with their text.

    Pages that fail are left out and listed under ``failures``; the call only
    fails when the input is invalid or no page could be scraped.
    """
    session = _session(request)
    result = await session.ingest(body.urls)

    if not result.success:
        if result.error_kind == AlreadyProcessing.kind:
            status_code = 409
        elif result.error_kind in _UPSTREAM_KINDS:
            status_code = 502
        else:
            status_code = 422
        raise HTTPException(status_code=status_code, detail=result.error)

    return IngestResponse(
        urls=session.context.urls,
        content=result.content,
        metadata=_metadata_out(result.metadata),
        failures=[PageFailureOut(url=p.url, error=p.error or "") for p in result.failures],
    )


@router.get("/context", response_model=ContextOut)
def get_context_endpoint(request: Request) -> ContextOut:
    """Return the current context state."""
    session = _session(request)
    ctx = session.context
    return ContextOut(
        status=session.status.value,
        ready=session.is_ready,
        urls=ctx.urls,
        content=ctx.content,
        is_processing=ctx.is_processing,
        error=ctx.error,
        metadata=_metadata_out(ctx.metadata),
    )


@router.post("/reset", status_code=204, response_class=Response, response_model=None)
def reset_endpoint(request: Request) -> Response:
    """Clear all context and chat history."""
    _session(request).reset()
    return Response(status_code=204)
