"""
Prompt Builder - generation instruction assembly.

Purely structural: answer text is passed through unchanged, never
summarized or rewritten. The same answers corpus feeds both the real
prompt and the mock fallback story.
"""

import logging
from typing import Iterable, Optional

from ..config import DEFAULT_ORGANIZATION
from ..session.entities import Answer

logger = logging.getLogger(__name__)

ANSWERS_DELIMITER = "Based on these answers, write a compelling fundraising story:"

SYSTEM_PROMPT_TEMPLATE = """You are an expert writer at {organization}, proficient in creative writing. Keep the story simple, supporters don't need a lot of medical or scientific details. Just help them understand why they should care and how they can help.

Write the story in FIRST PERSON from the perspective of the person who needs help. Use "I", "me", "my" throughout the story to make it personal and direct.

The story should follow this narrative structure:
1. Introduction - Who am I beyond my diagnosis?
2. Struggle - What challenges am I facing?
3. Help - How can donations and support make a difference in my life?

Write in a {tone} tone. Make it compelling and personal while remaining respectful and authentic."""


def _format_answer(answer: Answer) -> str:
    text = answer.answer
    if answer.follow_up_answer:
        text += f" {answer.follow_up_answer}"
    return text


def build_answers_corpus(answers: Iterable[Answer]) -> str:
    """
    Join the usable answers into one text block.

    Skipped and empty answers are dropped; each remaining answer contributes
    its text, plus its follow-up after a space. Blocks are separated by a
    blank line and keep their original order.

    Args:
        answers: Answers in session order

    Returns:
        The answers corpus (empty string if nothing is usable)
    """
    return "\n\n".join(_format_answer(a) for a in answers if a.has_content)


def build_system_prompt(tone: str, organization: Optional[str] = None) -> str:
    """
    Build the writer role directive.

    Args:
        tone: Resolved tone name
        organization: Organization the writer works for

    Returns:
        Directive text with the tone interpolated
    """
    return SYSTEM_PROMPT_TEMPLATE.format(
        organization=organization or DEFAULT_ORGANIZATION,
        tone=tone,
    )


def build_story_prompt(
    tone: str,
    answers: Iterable[Answer],
    organization: Optional[str] = None,
) -> str:
    """
    Build the full generation instruction.

    Layout: role directive, blank line, delimiter line, blank line, corpus.
    """
    corpus = build_answers_corpus(answers)
    prompt = f"{build_system_prompt(tone, organization)}\n\n{ANSWERS_DELIMITER}\n\n{corpus}"
    logger.debug(f"[PromptBuilder] Prompt built - tone: {tone}, {len(prompt)} chars")
    return prompt
