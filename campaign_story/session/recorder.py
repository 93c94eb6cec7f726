"""
Answer Recorder.

Merges one answer or skip at a time into a caller-held answer collection and
persists the complete collection through SessionStore.replace_answers.

Merge policy:
- Existing question id: overwritten in place (position preserved)
- New question id: appended
- answer() always sets skipped=False
- skip() keeps any earlier text and only flips skipped=True

"required" on a question is advisory; skipping a required question is allowed.
"""

import logging
from typing import Iterable, List, Optional

from ..errors import AnswerValidationError, QuestionNotFoundError
from ..questions import TONE_QUESTION_ID, get_question, is_known_question
from .entities import Answer, Tone
from .store import SessionStore

logger = logging.getLogger(__name__)


def validate_answers(answers: Iterable[Answer]) -> List[Answer]:
    """
    Validate a full answer set before it replaces a session's answers.

    Raises:
        AnswerValidationError: On unknown or duplicated question ids

    Returns:
        The answers as a list, order preserved
    """
    seen = set()
    validated = []
    for answer in answers:
        if not is_known_question(answer.question_id):
            raise AnswerValidationError(f"Unknown question id: {answer.question_id}")
        if answer.question_id in seen:
            raise AnswerValidationError(f"Duplicate answer for question id: {answer.question_id}")
        seen.add(answer.question_id)
        validated.append(answer)
    return validated


def _copy_answers(answers: Iterable[Answer]) -> List[Answer]:
    return [
        Answer(a.question_id, a.answer, a.follow_up_answer, a.skipped)
        for a in answers
    ]


class AnswerRecorder:
    """
    Client-side answer collection for one session.

    Every change writes the whole collection back to the store.
    """

    def __init__(
        self,
        store: SessionStore,
        session_id: str,
        answers: Optional[Iterable[Answer]] = None,
    ):
        self.store = store
        self.session_id = session_id
        self._answers: List[Answer] = _copy_answers(validate_answers(answers or []))

    @classmethod
    def for_session(cls, store: SessionStore, session_id: str) -> "AnswerRecorder":
        """Resume from the answers currently stored for a session."""
        return cls(store, session_id, store.get(session_id).answers)

    @property
    def answers(self) -> List[Answer]:
        return _copy_answers(self._answers)

    def _index_of(self, question_id: str) -> Optional[int]:
        for i, existing in enumerate(self._answers):
            if existing.question_id == question_id:
                return i
        return None

    def _check_question(self, question_id: str) -> None:
        try:
            get_question(question_id)
        except QuestionNotFoundError as e:
            raise AnswerValidationError(str(e)) from e

    def _persist(self, updated: List[Answer]) -> None:
        """Save the full collection, keeping local state only once the store accepts it."""
        self.store.replace_answers(self.session_id, updated)
        self._answers = updated

    def answer(
        self,
        question_id: str,
        text: str,
        follow_up: Optional[str] = None,
    ) -> List[Answer]:
        """
        Record an answer, replacing any earlier answer for the same question.

        Answering the tone question with a supported tone also stores it as
        the session tone.

        Raises:
            AnswerValidationError: Unknown question id
            SessionNotFoundError: Session no longer exists

        Returns:
            The updated answer collection
        """
        self._check_question(question_id)

        new_answer = Answer(
            question_id=question_id,
            answer=text or "",
            follow_up_answer=follow_up,
            skipped=False,
        )
        updated = self.answers
        index = self._index_of(question_id)
        if index is None:
            updated.append(new_answer)
        else:
            updated[index] = new_answer

        self._persist(updated)

        if question_id == TONE_QUESTION_ID:
            tone = Tone.parse(text)
            if tone is not None:
                self.store.set_tone(self.session_id, tone)
            else:
                logger.info(f"[AnswerRecorder] Tone answer for {self.session_id} is free text, session tone unchanged")

        return self.answers

    def skip(self, question_id: str) -> List[Answer]:
        """
        Record a skip for a question.

        Raises:
            AnswerValidationError: Unknown question id
            SessionNotFoundError: Session no longer exists

        Returns:
            The updated answer collection
        """
        self._check_question(question_id)

        updated = self.answers
        index = self._index_of(question_id)
        if index is None:
            updated.append(Answer(question_id=question_id, answer="", skipped=True))
        else:
            updated[index].skipped = True

        self._persist(updated)
        return self.answers
