"""
Service dependencies.

Routes receive the store and generator through Depends() so tests can swap
them with app.dependency_overrides.
"""

from ...session.store import SessionStore, get_store
from ...story.generator import StoryGenerator, get_generator


def get_session_store() -> SessionStore:
    """Process-wide session store."""
    return get_store()


def get_story_generator() -> StoryGenerator:
    """Process-wide story generator."""
    return get_generator()
