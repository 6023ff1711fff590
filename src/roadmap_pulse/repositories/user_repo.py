"""Data access helpers for users and their panel memberships."""
from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from roadmap_pulse.models import PanelMembership, User

__all__ = ["UserRepository"]


class UserRepository:
    """Read-only access to voter identities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def has_active_panel_membership(self, user_id: str) -> bool:
        """Return whether the user currently sits on at least one panel."""
        stmt = select(
            exists().where(
                PanelMembership.user_id == user_id,
                PanelMembership.active.is_(True),
            )
        )
        return bool(self.session.scalar(stmt))
