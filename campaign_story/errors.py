"""
Campaign story exceptions.

Only lookups against unknown identifiers and malformed answer payloads
propagate to callers. GenerationFailure never leaves the story generator.
"""


class CampaignStoryError(Exception):
    """Base exception for all campaign story errors."""
    pass


class NotFoundError(CampaignStoryError):
    """Raised when a requested record does not exist."""
    pass


class SessionNotFoundError(NotFoundError):
    """Raised when a requested session does not exist."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class QuestionNotFoundError(NotFoundError):
    """Raised when a question id is not in the catalog."""

    def __init__(self, question_id: str):
        self.question_id = question_id
        super().__init__(f"Question not found: {question_id}")


class AnswerValidationError(CampaignStoryError):
    """
    Raised when an answer payload is malformed.

    Examples:
    - Answer referencing an unknown question id
    - Two answers for the same question id in one full-set submission
    - Tone outside the supported set
    """
    pass


class GenerationFailure(CampaignStoryError):
    """
    Raised when the external generative service fails or returns no text.

    Caught inside StoryGenerator and converted to the fallback narrative.
    """
    pass
