"""
Session and answer schemas.

Wire names are camelCase to match the browser wizard.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...session.entities import Answer, Tone


class AnswerPayload(BaseModel):
    """One answer as sent by the wizard."""

    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(
        ...,
        alias="questionId",
        min_length=1,
        description="Catalog question id",
        json_schema_extra={"examples": ["name", "struggles"]}
    )
    answer: str = Field(default="", description="Answer text, may be empty")
    follow_up_answer: Optional[str] = Field(
        default=None,
        alias="followUpAnswer",
        description="Answer to the question's follow-up prompt"
    )
    skipped: bool = Field(default=False, description="True when the creator skipped the question")

    @field_validator("answer", mode="before")
    @classmethod
    def _none_answer_is_empty(cls, value):
        return "" if value is None else value

    def to_entity(self) -> Answer:
        return Answer(
            question_id=self.question_id,
            answer=self.answer,
            follow_up_answer=self.follow_up_answer,
            skipped=self.skipped,
        )


class SaveAnswersRequest(BaseModel):
    """Full answer set for a session (never a delta)."""

    answers: List[AnswerPayload] = Field(..., description="Complete current answer collection, in order")


class ToneRequest(BaseModel):
    """Tone chosen by the creator."""

    tone: Tone = Field(
        ...,
        description="One of: serious, hopeful, light-hearted, sentimental",
        json_schema_extra={"examples": ["hopeful"]}
    )


class SessionCreateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")


class SuccessResponse(BaseModel):
    success: bool = True


class SessionResponse(BaseModel):
    """Full session record."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    answers: List[AnswerPayload] = Field(default=[])
    tone: Optional[Tone] = None
    story_draft: Optional[str] = Field(default=None, alias="storyDraft")
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")
