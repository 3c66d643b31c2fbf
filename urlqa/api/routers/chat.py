"""Chat endpoints.

Routes
------
GET  /chat    Full chat history, oldest first
POST /chat    Body: {"question": "..."}   → answer from the ingested context

Model and context failures are reported in the ``error`` field of a 200
response and recorded in the history, like any other assistant turn.  Only a
blank question is rejected outright.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from urlqa.errors import EmptyQuestion
from urlqa.rag.models import ChatTurn
from urlqa.session import ResearchSession

router = APIRouter()


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------

class ChatRequest(BaseModel):
    question: str


class ChatTurnOut(BaseModel):
    id: str
    role: str
    content: str
    timestamp: datetime


class ChatResponse(BaseModel):
    answer: str
    error: str | None = None
    error_kind: str | None = None
    turn: ChatTurnOut


# ---------------------------------------------------------------------------
# Serialisation helper
# ---------------------------------------------------------------------------

def _turn_out(turn: ChatTurn) -> ChatTurnOut:
    return ChatTurnOut(
        id=turn.id,
        role=turn.role,
        content=turn.content,
        timestamp=turn.timestamp,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/chat", response_model=list[ChatTurnOut])
def list_history_endpoint(request: Request) -> list[ChatTurnOut]:
    """Return every chat turn in insertion order."""
    session: ResearchSession = request.app.state.session
    return [_turn_out(t) for t in session.history]


@router.post("/chat", response_model=ChatResponse)
async def ask_endpoint(body: ChatRequest, request: Request) -> ChatResponse:
    """Answer a question and return the recorded assistant turn."""
    session: ResearchSession = request.app.state.session
    response = await session.ask(body.question)

    if response.error_kind == EmptyQuestion.kind:
        raise HTTPException(status_code=422, detail=response.error)

    return ChatResponse(
        answer=response.answer,
        error=response.error,
        error_kind=response.error_kind,
        turn=_turn_out(session.history[-1]),
    )
