"""
API Dependencies package.

Shared services injected into routes.
"""

from .services import get_session_store, get_story_generator

__all__ = ["get_session_store", "get_story_generator"]
