"""Data access helpers for working with votes."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import distinct, exists, select, update
from sqlalchemy.orm import Session

from roadmap_pulse.models import Vote

__all__ = ["VoteRepository"]


class VoteRepository:
    """Thin wrapper around database access for vote entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, vote_id: int) -> Vote | None:
        """Return a vote by identifier."""
        return self.session.get(Vote, vote_id)

    def get_for_user(self, user_id: str, feedback_id: str) -> Vote | None:
        """Return the vote ``user_id`` cast on ``feedback_id``, if any."""
        result = self.session.execute(
            select(Vote).where(Vote.feedback_id == feedback_id, Vote.user_id == user_id)
        )
        return result.scalars().first()

    def exists_for_user(self, user_id: str, feedback_id: str) -> bool:
        """Return whether the unique (feedback, user) pair is present."""
        stmt = select(
            exists().where(Vote.feedback_id == feedback_id, Vote.user_id == user_id)
        )
        return bool(self.session.scalar(stmt))

    def list_for_feedback(self, feedback_id: str) -> list[Vote]:
        """Return all votes cast on a feedback item."""
        result = self.session.execute(
            select(Vote).where(Vote.feedback_id == feedback_id).order_by(Vote.id)
        )
        return list(result.scalars())

    def list_voted_feedback_ids(self) -> list[str]:
        """Return the identifiers of every feedback item holding at least one vote."""
        result = self.session.execute(
            select(distinct(Vote.feedback_id)).order_by(Vote.feedback_id)
        )
        return list(result.scalars())

    def create(
        self,
        *,
        feedback_id: str,
        user_id: str,
        weight: float,
        decayed_weight: float | None = None,
        created_at: datetime | None = None,
    ) -> Vote:
        """Insert a new vote and return the persisted ORM instance.

        Args:
            feedback_id: Feedback item being endorsed.
            user_id: Voter identifier.
            weight: Base weight frozen at cast time.
            decayed_weight: Optional initial value for the cached decay column.
            created_at: Cast timestamp; defaults to the model's ``utcnow``.
        """
        vote = Vote(
            feedback_id=feedback_id,
            user_id=user_id,
            weight=weight,
            decayed_weight=decayed_weight,
        )
        if created_at is not None:
            vote.created_at = created_at
        self.session.add(vote)
        self.session.flush()
        return vote

    def delete(self, vote: Vote) -> None:
        """Remove a vote row."""
        self.session.delete(vote)
        self.session.flush()

    def update_decayed_weight(self, vote_id: int, decayed_weight: float) -> None:
        """Write the cached decayed weight for a single vote."""
        self.session.execute(
            update(Vote)
            .where(Vote.id == vote_id)
            .values(decayed_weight=decayed_weight)
        )
