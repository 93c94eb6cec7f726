"""
Question catalog schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...questions import QuestionCategory, QuestionDefinition


class QuestionResponse(BaseModel):
    """Single catalog question."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    follow_up_text: Optional[str] = Field(default=None, alias="followUpText")
    category: QuestionCategory
    required: bool

    @classmethod
    def from_definition(cls, question: QuestionDefinition) -> "QuestionResponse":
        return cls(
            id=question.id,
            text=question.prompt_text,
            follow_up_text=question.follow_up_text,
            category=question.category,
            required=question.required,
        )
