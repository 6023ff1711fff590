"""Data access helpers for working with feedback."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from roadmap_pulse.models import Feature, Feedback, FeedbackState, ModerationStatus, Village
from roadmap_pulse.models.common import OPEN_FEEDBACK_STATES

__all__ = ["FeedbackRepository"]


class FeedbackRepository:
    """Thin wrapper around database access for feedback entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, feedback_id: str) -> Feedback | None:
        """Return a feedback item by identifier."""
        return self.session.get(Feedback, feedback_id)

    def get_village(self, village_id: str) -> Village | None:
        """Return the village a feedback item was raised in."""
        return self.session.get(Village, village_id)

    def list_trending_candidates(
        self,
        cutoff: datetime,
        area: str | None = None,
    ) -> list[Feedback]:
        """Return approved, open feedback created at or after ``cutoff``.

        Rows come back newest first, with votes eagerly loaded so the ranker
        can score every item without further round-trips.
        """
        stmt = (
            select(Feedback)
            .where(
                Feedback.created_at >= cutoff,
                Feedback.moderation_status == ModerationStatus.APPROVED,
                Feedback.state.in_(OPEN_FEEDBACK_STATES),
            )
            .options(selectinload(Feedback.votes))
            .order_by(Feedback.created_at.desc())
            # Refresh vote collections already loaded earlier in this session.
            .execution_options(populate_existing=True)
        )
        if area is not None:
            stmt = stmt.join(Feature, Feedback.feature_id == Feature.id).where(Feature.area == area)
        return list(self.session.scalars(stmt).unique())

    def list_duplicate_candidates(self, exclude_id: str | None = None) -> list[Feedback]:
        """Return every feedback item that has not been merged elsewhere."""
        stmt = select(Feedback).where(Feedback.state != FeedbackState.MERGED)
        if exclude_id is not None:
            stmt = stmt.where(Feedback.id != exclude_id)
        return list(self.session.scalars(stmt.order_by(Feedback.created_at.desc())).unique())
