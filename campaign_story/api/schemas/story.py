"""
Story generation schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .session import AnswerPayload


class StoryGenerateRequest(BaseModel):
    """Request for story generation."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        description="Session that receives the draft. Unknown sessions are ignored."
    )
    tone: Optional[str] = Field(
        default=None,
        description="Tone override. Empty uses the session tone, then 'hopeful'.",
        json_schema_extra={"examples": ["hopeful", "serious", ""]}
    )
    answers: Optional[List[AnswerPayload]] = Field(
        default=None,
        description="Answers to write from. Omitted uses the session's stored answers."
    )

    @field_validator("tone", mode="before")
    @classmethod
    def _tone_as_text(cls, value):
        return None if value is None else str(value)


class StoryGenerateResponse(BaseModel):
    """Response from story generation. Always returned with status 200."""

    model_config = ConfigDict(populate_by_name=True)

    story: str
    session_id: Optional[str] = Field(default=None, alias="sessionId")
