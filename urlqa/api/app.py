"""FastAPI application factory.

Lifespan
--------
On startup the app builds a single :class:`~urlqa.session.ResearchSession`
(shared across all requests via ``request.app.state.session``) with a
Gemini client configured from ``settings``.  State lives in memory only and
is dropped on shutdown.

Routers
-------
    /ingest    URL ingestion and current context
    /chat      questions and chat history
    /reset     clear context and history
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from urlqa.config import settings
from urlqa.rag.llm import GeminiClient
from urlqa.session import ResearchSession

from urlqa.api.routers import chat as chat_router
from urlqa.api.routers import ingest as ingest_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the in-memory session on startup."""
    if getattr(app.state, "session", None) is None:
        app.state.session = ResearchSession(GeminiClient.from_settings())
    try:
        yield
    finally:
        app.state.session = None


def create_app(session: ResearchSession | None = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Args:
        session: Pre-built session to serve.  Tests pass one with mocked
            collaborators; ``None`` builds one from settings at startup.
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(
        title="URL Context Q&A API",
        description=(
            "Ingest a list of web pages into one in-memory context and ask "
            "questions answered only from that context by a Gemini model."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.session = session

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(ingest_router.router, tags=["ingest"])
    app.include_router(chat_router.router, tags=["chat"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn urlqa.api.app:app --reload
app = create_app()
