"""Repositories wrapping SQLAlchemy access per aggregate."""

from .feedback_repo import FeedbackRepository
from .panel_repo import PanelRepository
from .user_repo import UserRepository
from .vote_repo import VoteRepository

__all__ = [
    "FeedbackRepository",
    "PanelRepository",
    "UserRepository",
    "VoteRepository",
]
