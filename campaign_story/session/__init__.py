"""
Session module - answer state for one creator's questionnaire pass.
"""

from .entities import (
    Answer,
    Session,
    Tone,
    DEFAULT_TONE,
)

from .store import (
    SessionStore,
    init_store,
    get_store,
    reset_store,
)

from .recorder import (
    AnswerRecorder,
    validate_answers,
)

__all__ = [
    # entities
    "Answer",
    "Session",
    "Tone",
    "DEFAULT_TONE",
    # store
    "SessionStore",
    "init_store",
    "get_store",
    "reset_store",
    # recorder
    "AnswerRecorder",
    "validate_answers",
]
