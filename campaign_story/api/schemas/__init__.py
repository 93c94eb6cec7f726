"""
API Schemas package.

Pydantic models for request/response validation.
"""

from .questions import QuestionResponse
from .session import (
    AnswerPayload,
    SaveAnswersRequest,
    ToneRequest,
    SessionCreateResponse,
    SessionResponse,
    SuccessResponse,
)
from .story import (
    StoryGenerateRequest,
    StoryGenerateResponse,
)

__all__ = [
    "QuestionResponse",
    "AnswerPayload",
    "SaveAnswersRequest",
    "ToneRequest",
    "SessionCreateResponse",
    "SessionResponse",
    "SuccessResponse",
    "StoryGenerateRequest",
    "StoryGenerateResponse",
]
