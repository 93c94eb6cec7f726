"""
Tone resolution for story generation.

Order: explicit argument (non-empty) > session's stored tone > default.
"""

from typing import Iterable, Optional, Union

from ..questions import TONE_QUESTION_ID
from ..session.entities import DEFAULT_TONE, Answer, Tone


def resolve_tone(
    explicit: Optional[str],
    stored: Optional[Union[Tone, str]] = None,
    default: Union[Tone, str] = DEFAULT_TONE,
) -> str:
    """
    Determine the tone used for a generation call.

    Args:
        explicit: Tone passed with the generate trigger, may be empty
        stored: Tone saved on the session when the tone question was answered
        default: Tone used when neither is present

    Returns:
        Tone name, e.g. "hopeful"
    """
    if explicit is not None and explicit.strip():
        return explicit.strip()
    if stored:
        return stored.value if isinstance(stored, Tone) else str(stored)
    return default.value if isinstance(default, Tone) else str(default)


def tone_from_answers(answers: Iterable[Answer]) -> Optional[str]:
    """Text of the non-skipped tone answer, if any."""
    for answer in answers:
        if answer.question_id == TONE_QUESTION_ID and answer.has_content:
            return answer.answer.strip() or None
    return None
