"""
Story Generator.

Two branches, chosen once per call and never mixed:
- configured: send the assembled prompt to Vertex AI and return its text verbatim
- fallback: compose a labeled mock story from the same answers corpus

generate() never raises. Missing configuration, SDK errors, timeouts and
empty responses all end in the fallback branch, so HTTP callers need no
degraded-mode logic of their own.
"""

import asyncio
import logging
from typing import Iterable, List, Optional

from ..config import Settings, get_settings
from ..errors import GenerationFailure
from ..session.entities import Answer
from .model_provider import ModelProvider, get_provider, parse_model_spec
from .prompt_builder import build_answers_corpus, build_story_prompt

logger = logging.getLogger(__name__)

BRANCH_VERTEX = "vertex"
BRANCH_MOCK = "mock"

MOCK_STORY_TEMPLATE = """[MOCK STORY - {tone_upper} TONE - FIRST PERSON]

This is a sample story generated from your answers. To get AI-generated stories, please configure your Google Cloud Vertex AI credentials.

Based on your responses:
{corpus}

Your story would be crafted in a {tone} tone, written in first person from your perspective, following the narrative structure of introduction, struggle, and how people can help.

To enable AI story generation:
1. Set up a Google Cloud project
2. Enable Vertex AI API
3. Configure authentication (GOOGLE_APPLICATION_CREDENTIALS)
4. Update your .env file with GOOGLE_CLOUD_PROJECT and GOOGLE_CLOUD_LOCATION

For now, you can continue testing the app with this mock story generation."""


def compose_mock_story(tone: str, answers: Iterable[Answer]) -> str:
    """
    Deterministic placeholder story.

    Embeds the tone name and the same filtered corpus the real prompt uses.
    Never raises.
    """
    tone_name = str(tone or "").strip() or "hopeful"
    try:
        corpus = build_answers_corpus(answers or [])
    except Exception as e:
        # Malformed answer objects must not break the terminal branch
        logger.warning(f"[StoryGenerator] Could not build corpus for mock story: {e}")
        corpus = ""
    return MOCK_STORY_TEMPLATE.format(
        tone_upper=tone_name.upper(),
        tone=tone_name,
        corpus=corpus,
    )


def _as_list(answers: Optional[Iterable[Answer]]) -> List[Answer]:
    try:
        return list(answers or [])
    except TypeError:
        return []


class StoryGenerator:
    """
    Turns a tone and an answer set into a story draft.

    Whether the Vertex AI branch is available is decided once, at
    construction, from the process settings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[ModelProvider] = None,
    ):
        self.settings = settings or get_settings()
        self.provider: Optional[ModelProvider] = provider

        if self.provider is None and self.settings.vertex_configured:
            info = parse_model_spec(self.settings.story_model)
            try:
                self.provider = get_provider(
                    self.settings.story_model,
                    project_id=self.settings.project_id,
                    location=self.settings.location,
                    timeout=self.settings.timeout_seconds,
                )
                logger.info(
                    f"[StoryGenerator] Vertex AI configured - provider: {info.provider}, "
                    f"model: {info.model_name}, project: {self.settings.project_id}, "
                    f"location: {self.settings.location}"
                )
            except Exception as e:
                logger.error(f"[StoryGenerator] Failed to initialize Vertex AI: {e}")
                logger.info("[StoryGenerator] Continuing with mock story generation")
                self.provider = None
        elif self.provider is None:
            logger.warning(
                "[StoryGenerator] Google Cloud project not configured. "
                "Story generation will use mock data."
            )

    @property
    def configured(self) -> bool:
        return self.provider is not None

    @property
    def mode(self) -> str:
        return BRANCH_VERTEX if self.configured else BRANCH_MOCK

    def _generate_with_provider(self, tone: str, answers: List[Answer]) -> str:
        prompt = build_story_prompt(tone, answers, self.settings.organization_name)
        result = self.provider.generate(prompt, self.settings.generation_config())
        if not result.text or not result.text.strip():
            raise GenerationFailure("Provider returned an empty story")
        if result.usage:
            logger.info(
                f"[StoryGenerator] Token usage - input: {result.usage.get('input_tokens')}, "
                f"output: {result.usage.get('output_tokens')}"
            )
        return result.text

    def _fallback(self, tone: str, answers: List[Answer]) -> str:
        return compose_mock_story(tone, answers)

    def generate(self, tone: str, answers: Optional[Iterable[Answer]]) -> str:
        """
        Generate a story draft.

        Args:
            tone: Resolved tone name
            answers: Answers in session order

        Returns:
            Story text; the mock story when Vertex AI is unavailable or fails
        """
        answer_list = _as_list(answers)

        if not self.configured:
            logger.info("[StoryGenerator] Using mock story generation (not configured)")
            return self._fallback(tone, answer_list)

        try:
            text = self._generate_with_provider(tone, answer_list)
        except Exception as e:
            logger.error(f"[StoryGenerator] Error generating story: {e}")
            logger.info("[StoryGenerator] Falling back to mock story generation")
            return self._fallback(tone, answer_list)

        logger.info(f"[StoryGenerator] Story generated via Vertex AI ({len(text)} chars)")
        return text

    async def agenerate(
        self,
        tone: str,
        answers: Optional[Iterable[Answer]],
        timeout: Optional[float] = None,
    ) -> str:
        """
        Async generate() that keeps the event loop free.

        The blocking call runs in a worker thread bounded by timeout
        (settings.timeout_seconds by default). Expiry falls back to the mock.
        """
        answer_list = _as_list(answers)
        if not self.configured:
            return self.generate(tone, answer_list)

        limit = timeout if timeout is not None else self.settings.timeout_seconds
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(None, self.generate, tone, answer_list)
        try:
            return await asyncio.wait_for(future, timeout=limit)
        except asyncio.TimeoutError:
            logger.error(f"[StoryGenerator] Generation timed out after {limit}s")
            logger.info("[StoryGenerator] Falling back to mock story generation")
            return self._fallback(tone, answer_list)
        except Exception as e:
            logger.error(f"[StoryGenerator] Unexpected generation error: {e}")
            return self._fallback(tone, answer_list)


# =============================================================================
# Process-wide generator
# =============================================================================

_generator: Optional[StoryGenerator] = None


def init_generator(settings: Optional[Settings] = None) -> StoryGenerator:
    """Build the global generator. Call once at process start."""
    global _generator
    _generator = StoryGenerator(settings=settings)
    return _generator


def get_generator() -> StoryGenerator:
    """Get the global generator, building it on first use."""
    global _generator
    if _generator is None:
        _generator = StoryGenerator()
    return _generator


def reset_generator() -> None:
    """Drop the global generator."""
    global _generator
    _generator = None
