"""
Session domain entities.

- Answer: one recorded response (or explicit skip) to a single question
- Session: the full state of one creator's questionnaire pass
- Tone: categorical style directive applied to generation

Wire names follow the browser wizard's JSON (camelCase).
"""

import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class Tone(str, Enum):
    """Supported story tones."""

    SERIOUS = "serious"
    HOPEFUL = "hopeful"
    LIGHT_HEARTED = "light-hearted"
    SENTIMENTAL = "sentimental"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Tone"]:
        """Return the matching Tone, or None if value names no supported tone."""
        if not value:
            return None
        normalized = value.strip().lower().replace(" ", "-").replace("_", "-")
        if normalized == "lighthearted":
            normalized = cls.LIGHT_HEARTED.value
        for tone in cls:
            if tone.value == normalized:
                return tone
        return None


DEFAULT_TONE = Tone.HOPEFUL


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 with a trailing Z."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Answer:
    """
    A response to one question.

    When skipped is True the answer text carries no meaning and is excluded
    from story composition. The text is kept so a skip never erases it.
    """

    question_id: str
    answer: str = ""
    follow_up_answer: Optional[str] = None
    skipped: bool = False

    @property
    def has_content(self) -> bool:
        """True if this answer contributes text to a story."""
        return not self.skipped and bool(self.answer)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "questionId": self.question_id,
            "answer": self.answer,
            "skipped": self.skipped,
        }
        if self.follow_up_answer is not None:
            data["followUpAnswer"] = self.follow_up_answer
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Answer":
        return cls(
            question_id=data["questionId"],
            answer=data.get("answer") or "",
            follow_up_answer=data.get("followUpAnswer"),
            skipped=bool(data.get("skipped", False)),
        )


@dataclass
class Session:
    """
    One campaign creator's questionnaire state.

    Answers keep arrival order; at most one answer per question id is live.
    updated_at never moves backwards.
    """

    session_id: str
    answers: List[Answer] = field(default_factory=list)
    tone: Optional[Tone] = None
    story_draft: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(cls) -> "Session":
        """Create an empty session with a generated id."""
        now = utc_now()
        return cls(session_id=generate_uuid(), created_at=now, updated_at=now)

    def touch(self) -> None:
        """Bump updated_at, keeping it monotonically non-decreasing."""
        self.updated_at = max(utc_now(), self.updated_at)

    def snapshot(self) -> "Session":
        """Deep copy handed out to callers."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "answers": [a.to_dict() for a in self.answers],
            "tone": self.tone.value if self.tone else None,
            "storyDraft": self.story_draft,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        created_at = parse_timestamp(data["createdAt"]) if data.get("createdAt") else utc_now()
        updated_at = parse_timestamp(data["updatedAt"]) if data.get("updatedAt") else created_at
        return cls(
            session_id=data["sessionId"],
            answers=[Answer.from_dict(a) for a in data.get("answers") or []],
            tone=Tone.parse(data.get("tone")),
            story_draft=data.get("storyDraft"),
            created_at=created_at,
            updated_at=updated_at,
        )
