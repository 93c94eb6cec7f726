"""
Questionnaire definitions.
"""

from .catalog import (
    QUESTIONS,
    TONE_QUESTION_ID,
    QuestionCategory,
    QuestionDefinition,
    get_question,
    is_known_question,
    list_questions,
)

__all__ = [
    "QUESTIONS",
    "TONE_QUESTION_ID",
    "QuestionCategory",
    "QuestionDefinition",
    "get_question",
    "is_known_question",
    "list_questions",
]
