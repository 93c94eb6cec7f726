"""
Question catalog router.

Endpoints:
- GET /questions - Ordered questionnaire
"""

from typing import List

from fastapi import APIRouter

from ...questions import list_questions
from ..schemas.questions import QuestionResponse

router = APIRouter()


@router.get(
    "/questions",
    response_model=List[QuestionResponse],
    response_model_exclude_none=True,
)
def get_questions():
    """Return all questions in presentation order."""
    return [QuestionResponse.from_definition(q) for q in list_questions()]
