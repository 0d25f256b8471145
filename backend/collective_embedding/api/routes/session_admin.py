"""Session Admin Routes — facilitator controls for the single live session.

Invariants:
    - Every route is one SessionEngine call; outcome dicts are returned as-is
    - Refusals and no-ops are 200 responses with status != "ok" (callers decide to retry)
    - Request bodies are validated by Pydantic before reaching the engine

Design Decisions:
    - Join URL built from settings.public_base_url, falling back to the request's
      base URL (works behind a plain LAN address without configuration)
"""

import logging

from fastapi import APIRouter, Body, Depends, Request, status

from collective_embedding.api.dependencies import get_engine
from collective_embedding.config import Settings, get_settings
from collective_embedding.core.questions import Question
from collective_embedding.core.session_engine import SessionEngine
from collective_embedding.schemas.session import (
    PauseResume, SessionCreate, SessionCreated, SessionStatus,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/session", tags=["session"])


def build_join_url(base_url: str, session_id: str) -> str:
    return f"{base_url.rstrip('/')}/join/{session_id}"


@router.post(
    "/create", response_model=SessionCreated, status_code=status.HTTP_201_CREATED,
)
async def create_session(
    request: Request,
    body: SessionCreate | None = Body(None),
    engine: SessionEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
):
    """Create a new session, discarding any previous one."""
    questions = None
    if body is not None and body.questions:
        questions = [Question.of(q.text, q.channel) for q in body.questions]
    outcome = engine.create_session(questions)
    session_id = outcome["session_id"]
    base_url = settings.public_base_url or str(request.base_url)
    return SessionCreated(
        session_id=session_id,
        join_url=build_join_url(base_url, session_id),
        total_questions=outcome["total_questions"],
    )


@router.get(
    "/status", response_model=SessionStatus, response_model_exclude_none=True,
)
async def get_status(engine: SessionEngine = Depends(get_engine)):
    return engine.status()


@router.post("/start-questions")
async def start_questions(engine: SessionEngine = Depends(get_engine)):
    return engine.start_questions()


@router.post("/next-question")
async def next_question(engine: SessionEngine = Depends(get_engine)):
    """Advance once everyone present has answered the current question."""
    return engine.advance_question()


@router.post("/epoch-update")
async def epoch_update(engine: SessionEngine = Depends(get_engine)):
    return engine.increment_epoch()


@router.post("/pause-resume")
async def pause_resume(
    body: PauseResume, engine: SessionEngine = Depends(get_engine),
):
    return engine.set_paused(body.pause)


@router.post("/end")
async def end_session(engine: SessionEngine = Depends(get_engine)):
    return engine.end_session()


@router.post("/delete-identities")
async def delete_identities(engine: SessionEngine = Depends(get_engine)):
    """Irreversibly discard real names; labels switch to Node-NN."""
    return engine.suppress_identity()
