"""
Session Store - in-memory session storage.

Design principles:
- Ephemeral by design: records live as long as the process
- The store owns every Session; callers get deep-copied snapshots
- One short lock per operation, so unrelated sessions never wait on each other
  beyond a dict access
- Draft write-back is best-effort (try_set_draft) and never raises
"""

import logging
import threading
from typing import Dict, Iterable, List, Optional

from ..errors import SessionNotFoundError
from .entities import Answer, Session, Tone

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Keyed collection of per-creator sessions.

    Provides:
    - create / get
    - replace_answers (full-set overwrite, never deltas)
    - set_tone
    - try_set_draft (silently ignores unknown sessions)
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def _require(self, session_id: str) -> Session:
        """Return the owned record. Caller must hold the lock."""
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def create(self) -> str:
        """
        Create an empty session.

        Returns:
            The new session id
        """
        session = Session.create()
        with self._lock:
            # uuid4 collisions are not expected; never reuse an id regardless
            while session.session_id in self._sessions:
                session = Session.create()
            self._sessions[session.session_id] = session

        logger.info(f"[SessionStore] Created session {session.session_id}")
        return session.session_id

    def get(self, session_id: str) -> Session:
        """
        Get a snapshot of a session.

        Raises:
            SessionNotFoundError: If the id is unknown
        """
        with self._lock:
            return self._require(session_id).snapshot()

    def replace_answers(self, session_id: str, answers: Iterable[Answer]) -> Session:
        """
        Overwrite the full answer set of a session.

        Args:
            session_id: Target session
            answers: Complete current answer collection, in order

        Returns:
            Snapshot of the updated session

        Raises:
            SessionNotFoundError: If the id is unknown
        """
        copied: List[Answer] = [
            Answer(
                question_id=a.question_id,
                answer=a.answer,
                follow_up_answer=a.follow_up_answer,
                skipped=a.skipped,
            )
            for a in answers
        ]
        with self._lock:
            session = self._require(session_id)
            session.answers = copied
            session.touch()
            snapshot = session.snapshot()

        logger.debug(f"[SessionStore] Saved {len(copied)} answers for {session_id}")
        return snapshot

    def set_tone(self, session_id: str, tone: Tone) -> Session:
        """
        Set the session tone.

        Raises:
            SessionNotFoundError: If the id is unknown
        """
        with self._lock:
            session = self._require(session_id)
            session.tone = Tone(tone)
            session.touch()
            snapshot = session.snapshot()

        logger.debug(f"[SessionStore] Tone for {session_id}: {snapshot.tone.value}")
        return snapshot

    def try_set_draft(self, session_id: Optional[str], draft: str) -> bool:
        """
        Store a generated story draft if the session still exists.

        Unlike the other setters this never raises: the draft arrives after a
        slow external call and the session may be gone by then.

        Returns:
            True if the draft was stored, False if the session is unknown
        """
        with self._lock:
            session = self._sessions.get(session_id) if session_id else None
            if session is None:
                stored = False
            else:
                session.story_draft = draft
                session.touch()
                stored = True

        if stored:
            logger.info(f"[SessionStore] Stored draft for {session_id} ({len(draft)} chars)")
        else:
            logger.info(f"[SessionStore] Draft write-back skipped, session not found: {session_id}")
        return stored

    def delete(self, session_id: str) -> bool:
        """
        Remove a session (eviction hook for deployments and tests).

        Returns:
            True if a session was removed
        """
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info(f"[SessionStore] Deleted session {session_id}")
        return removed


# =============================================================================
# Process-wide store
# =============================================================================

_store: Optional[SessionStore] = None
_store_lock = threading.Lock()


def init_store() -> SessionStore:
    """
    Initialize the global session store.

    Call this at process start. Any previous sessions are dropped.
    """
    global _store
    with _store_lock:
        _store = SessionStore()
    return _store


def get_store() -> SessionStore:
    """Get the global session store, creating it on first use."""
    global _store
    with _store_lock:
        if _store is None:
            _store = SessionStore()
        return _store


def reset_store() -> None:
    """Drop the global session store."""
    global _store
    with _store_lock:
        _store = None
