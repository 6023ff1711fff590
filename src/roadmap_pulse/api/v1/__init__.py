# src/roadmap_pulse/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import feedback_router, panels_router, votes_router

__all__ = [
    "feedback_router",
    "panels_router",
    "votes_router",
]
