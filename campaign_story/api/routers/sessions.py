"""
Session router.

Endpoints:
- POST /sessions - Create an empty session
- GET /sessions/{session_id} - Full session record
- POST /sessions/{session_id}/answers - Replace the full answer set
- POST /sessions/{session_id}/tone - Set the session tone
- GET /sessions/{session_id}/export - Download as json or csv
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ...errors import AnswerValidationError, SessionNotFoundError
from ...export import export_session
from ...session.recorder import validate_answers
from ...session.store import SessionStore
from ..dependencies import get_session_store
from ..schemas.session import (
    SaveAnswersRequest,
    SessionCreateResponse,
    SessionResponse,
    SuccessResponse,
    ToneRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SESSION_NOT_FOUND = "Session not found"


@router.post("/sessions", response_model=SessionCreateResponse)
def create_session(store: SessionStore = Depends(get_session_store)):
    """Create a new, empty session."""
    return SessionCreateResponse(session_id=store.create())


@router.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Return the current session record."""
    try:
        session = store.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)
    return SessionResponse.model_validate(session.to_dict())


@router.post("/sessions/{session_id}/answers", response_model=SuccessResponse)
def save_answers(
    session_id: str,
    request: SaveAnswersRequest,
    store: SessionStore = Depends(get_session_store),
):
    """
    Replace the session's full answer set.

    The wizard always sends every answer it holds, never a delta.
    """
    if session_id not in store:
        raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)

    try:
        answers = validate_answers(a.to_entity() for a in request.answers)
    except AnswerValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        store.replace_answers(session_id, answers)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)
    return SuccessResponse()


@router.post("/sessions/{session_id}/tone", response_model=SuccessResponse)
def set_tone(
    session_id: str,
    request: ToneRequest,
    store: SessionStore = Depends(get_session_store),
):
    """Store the tone chosen for the session."""
    try:
        store.set_tone(session_id, request.tone)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)
    return SuccessResponse()


@router.get("/sessions/{session_id}/export")
def export(
    session_id: str,
    format: Optional[str] = Query(default="json", description="json or csv; anything else means json"),
    store: SessionStore = Depends(get_session_store),
):
    """Download the session as an attachment."""
    try:
        session = store.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)

    body, media_type, filename = export_session(session, format)
    logger.info(f"[SessionAPI] Export {session_id} as {filename.rsplit('.', 1)[-1]}")
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
