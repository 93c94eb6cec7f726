"""
Question catalog.

The fixed questionnaire a campaign creator walks through. Catalog order is
the presentation order and the canonical order used wherever answers are
enumerated. Keep ids stable: stored answers reference them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..errors import QuestionNotFoundError


class QuestionCategory(str, Enum):
    """Narrative section a question feeds."""

    BASIC_INFO = "basic_info"
    INTRO = "intro"
    STRUGGLE = "struggle"
    HELP = "help"
    BACKGROUND = "background"


@dataclass(frozen=True)
class QuestionDefinition:
    """A single questionnaire entry."""

    id: str
    prompt_text: str
    category: QuestionCategory
    required: bool
    follow_up_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "text": self.prompt_text,
            "category": self.category.value,
            "required": self.required,
        }
        if self.follow_up_text:
            data["followUpText"] = self.follow_up_text
        return data


TONE_QUESTION_ID = "tone"

QUESTIONS: Tuple[QuestionDefinition, ...] = (
    # ---- Basic campaign information ----
    QuestionDefinition(
        id="name",
        prompt_text="What is your name?",
        category=QuestionCategory.BASIC_INFO,
        required=True,
    ),
    QuestionDefinition(
        id="gender",
        prompt_text=(
            "What are your pronouns? This helps us write your story correctly "
            "(he/him, she/her, they/them, etc.)"
        ),
        category=QuestionCategory.BASIC_INFO,
        required=True,
    ),
    QuestionDefinition(
        id="condition",
        prompt_text=(
            "What is your medical condition or injury? Please provide a brief "
            "description of your diagnosis or what happened"
        ),
        category=QuestionCategory.BASIC_INFO,
        required=True,
    ),
    QuestionDefinition(
        id="age",
        prompt_text="How old are you? This helps supporters understand your life stage",
        category=QuestionCategory.BASIC_INFO,
        required=False,
    ),
    # ---- Tone selection ----
    QuestionDefinition(
        id=TONE_QUESTION_ID,
        prompt_text=(
            "What tone feels right for your story? Would you like to sound "
            "hopeful, serious, or something else?"
        ),
        category=QuestionCategory.INTRO,
        required=False,
    ),
    # ---- Introduction ----
    QuestionDefinition(
        id="identity",
        prompt_text=(
            "Who are you outside of your diagnosis? Tell us about your work, "
            "hobbies, family, etc."
        ),
        category=QuestionCategory.INTRO,
        required=False,
    ),
    QuestionDefinition(
        id="interesting_things",
        prompt_text="What are some interesting things about you?",
        follow_up_text="How would your friends and family describe you?",
        category=QuestionCategory.INTRO,
        required=False,
    ),
    QuestionDefinition(
        id="loved_qualities",
        prompt_text="What do other people love about you?",
        follow_up_text="Are there any quotes, compliments, or traits people mention?",
        category=QuestionCategory.INTRO,
        required=False,
    ),
    # ---- Struggle and help ----
    QuestionDefinition(
        id="struggles",
        prompt_text=(
            "What are 1-5 things you struggle with because of your condition? "
            "This can be daily activities, feelings, or anything that is hard."
        ),
        category=QuestionCategory.STRUGGLE,
        required=True,
    ),
    QuestionDefinition(
        id="how_funds_help",
        prompt_text=(
            "How could these funds help change your life? What will you be able "
            "to enjoy again? Or for the first time?"
        ),
        category=QuestionCategory.HELP,
        required=True,
    ),
    QuestionDefinition(
        id="fundraising_for",
        prompt_text=(
            "What are you fundraising for? If cost is known (or rough estimate) "
            "please add it."
        ),
        category=QuestionCategory.HELP,
        required=True,
    ),
    QuestionDefinition(
        id="other_help",
        prompt_text=(
            "How can people help besides donating money? Can people visit? Help "
            "with car rides? Gas money? Food? Clothing? Etc."
        ),
        category=QuestionCategory.HELP,
        required=False,
    ),
    QuestionDefinition(
        id="summary",
        prompt_text="Can you summarize your fundraiser in one sentence?",
        category=QuestionCategory.HELP,
        required=False,
    ),
    # ---- Background and deeper struggle ----
    QuestionDefinition(
        id="hospital",
        prompt_text="What hospital are you at?",
        category=QuestionCategory.BACKGROUND,
        required=False,
    ),
    QuestionDefinition(
        id="diagnosis_thoughts",
        prompt_text="What was going through your mind when you got your diagnosis?",
        category=QuestionCategory.STRUGGLE,
        required=False,
    ),
    QuestionDefinition(
        id="strong_vulnerable_moment",
        prompt_text=(
            "Can you describe a moment that made you feel strong or vulnerable "
            "lately? What helped you through it?"
        ),
        category=QuestionCategory.STRUGGLE,
        required=False,
    ),
    QuestionDefinition(
        id="unexpected_challenge",
        prompt_text=(
            "What has been the most unexpected challenge about all of this? "
            "How do you handle it?"
        ),
        category=QuestionCategory.STRUGGLE,
        required=False,
    ),
    QuestionDefinition(
        id="other_resources",
        prompt_text="Have you tried other resources or funding before this?",
        follow_up_text="Why is the fundraiser the best next step?",
        category=QuestionCategory.BACKGROUND,
        required=False,
    ),
    QuestionDefinition(
        id="time_sensitive",
        prompt_text=(
            "Are there any time-sensitive parts of your care or recovery right "
            "now? A scheduled surgery, treatment deadline"
        ),
        category=QuestionCategory.HELP,
        required=False,
    ),
    QuestionDefinition(
        id="looking_forward",
        prompt_text=(
            "What is something you're looking forward to if this goes well? "
            "Seeing a family member, going on a trip, even walking your dog"
        ),
        category=QuestionCategory.HELP,
        required=False,
    ),
)


def _build_index(questions: Tuple[QuestionDefinition, ...]) -> Dict[str, QuestionDefinition]:
    index: Dict[str, QuestionDefinition] = {}
    for question in questions:
        if question.id in index:
            raise ValueError(f"Duplicate question id in catalog: {question.id}")
        index[question.id] = question
    return index


_QUESTION_INDEX = _build_index(QUESTIONS)


def list_questions() -> List[QuestionDefinition]:
    """Return all questions in canonical order."""
    return list(QUESTIONS)


def get_question(question_id: str) -> QuestionDefinition:
    """
    Look up a question by id.

    Raises:
        QuestionNotFoundError: If the id is not in the catalog
    """
    try:
        return _QUESTION_INDEX[question_id]
    except KeyError:
        raise QuestionNotFoundError(question_id) from None


def is_known_question(question_id: str) -> bool:
    return question_id in _QUESTION_INDEX
