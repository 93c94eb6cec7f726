"""
API Routers package.
"""

from . import questions, sessions, story

__all__ = ["questions", "sessions", "story"]
