"""
Story module - story generation pipeline components.

- Tone resolution
- Prompt building
- Vertex AI model providers
- Story generation with mock fallback
"""

from .tone import (
    resolve_tone,
    tone_from_answers,
)

from .prompt_builder import (
    build_answers_corpus,
    build_system_prompt,
    build_story_prompt,
)

from .model_provider import (
    ModelInfo,
    GenerationResult,
    extract_text,
    get_provider,
    parse_model_spec,
)

from .generator import (
    StoryGenerator,
    compose_mock_story,
    init_generator,
    get_generator,
    reset_generator,
)

__all__ = [
    # tone
    "resolve_tone",
    "tone_from_answers",
    # prompt_builder
    "build_answers_corpus",
    "build_system_prompt",
    "build_story_prompt",
    # model_provider
    "ModelInfo",
    "GenerationResult",
    "extract_text",
    "get_provider",
    "parse_model_spec",
    # generator
    "StoryGenerator",
    "compose_mock_story",
    "init_generator",
    "get_generator",
    "reset_generator",
]
