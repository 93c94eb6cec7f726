"""
Story router.

Endpoints:
- POST /generate-story - Generate a story draft (always 200)

Generation never fails outward: StoryGenerator falls back to a mock story.
The draft is written back to the session on a best-effort basis.
"""

import logging

from fastapi import APIRouter, Depends

from ...errors import SessionNotFoundError
from ...session.store import SessionStore
from ...story.generator import StoryGenerator
from ...story.tone import resolve_tone
from ..dependencies import get_session_store, get_story_generator
from ..schemas.story import StoryGenerateRequest, StoryGenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-story", response_model=StoryGenerateResponse)
async def generate_story(
    request: StoryGenerateRequest,
    store: SessionStore = Depends(get_session_store),
    generator: StoryGenerator = Depends(get_story_generator),
):
    """
    Generate a story from the given answers and tone.

    Tone: request tone if non-empty, else the session's stored tone, else
    "hopeful". Answers: request answers, else the session's stored answers.
    """
    session = None
    if request.session_id:
        try:
            session = store.get(request.session_id)
        except SessionNotFoundError:
            logger.info(f"[StoryAPI] Session {request.session_id} not found, generating without it")

    tone = resolve_tone(request.tone, session.tone if session else None)

    if request.answers is not None:
        answers = [a.to_entity() for a in request.answers]
    else:
        answers = session.answers if session else []

    logger.info(f"[StoryAPI] Generating story - session: {request.session_id}, tone: {tone}, answers: {len(answers)}")
    story = await generator.agenerate(tone, answers)

    store.try_set_draft(request.session_id, story)

    return StoryGenerateResponse(story=story, session_id=request.session_id)
