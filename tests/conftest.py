"""
Pytest configuration and shared fixtures.
"""

import os

import pytest

from campaign_story.session.entities import Answer

_VERTEX_ENV_VARS = (
    "GOOGLE_CLOUD_PROJECT",
    "GOOGLE_CLOUD_LOCATION",
    "STORY_MODEL",
    "STORY_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True, scope="function")
def reset_process_state():
    """
    Reset environment-driven state before each test.

    Tests run with Vertex AI unconfigured (mock generation) and a fresh
    session store, unless a test explicitly sets otherwise.
    """
    from campaign_story.config import reset_settings
    from campaign_story.session.store import reset_store
    from campaign_story.story.generator import reset_generator

    original = {key: os.environ.get(key) for key in _VERTEX_ENV_VARS}
    for key in _VERTEX_ENV_VARS:
        os.environ.pop(key, None)

    reset_settings()
    reset_store()
    reset_generator()

    yield

    for key, value in original.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)

    reset_settings()
    reset_store()
    reset_generator()


@pytest.fixture
def sample_answers():
    """Three answers in session order, one with a follow-up."""
    return [
        Answer(question_id="name", answer="Alex"),
        Answer(
            question_id="interesting_things",
            answer="I restore old bicycles.",
            follow_up_answer="Friends call me stubborn in the best way.",
        ),
        Answer(question_id="struggles", answer="Climbing stairs is hard now."),
    ]
