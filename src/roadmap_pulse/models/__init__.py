"""SQLAlchemy models for the Roadmap Pulse application."""

from .common import FeedbackState, ModerationStatus, Role, VillagePriority
from .feedback import Feature, Feedback
from .panel import Panel, PanelMembership, PanelQuota
from .user import User, Village
from .vote import Vote

__all__ = [
    "Feature", "Feedback",
    "FeedbackState", "ModerationStatus", "Role", "VillagePriority",
    "Panel", "PanelMembership", "PanelQuota",
    "User", "Village",
    "Vote",
]
