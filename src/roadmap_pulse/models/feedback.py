"""SQLAlchemy models for feedback items and the product features they map to."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roadmap_pulse.db.session import Base
from roadmap_pulse.db.time import utcnow

from .common import FeedbackState, ModerationStatus, enum_type, new_id
from .user import User

if TYPE_CHECKING:
    from .vote import Vote


class Feature(Base):
    """Roadmap feature grouped under a product area."""

    __tablename__ = "feature"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: new_id("feat"))
    title: Mapped[str] = mapped_column(Text, nullable=False)
    # Product area, e.g. "Reservations", "CheckIn", "Payments".
    area: Mapped[str] = mapped_column(String(64), nullable=False)


class Feedback(Base):
    """The item users vote on and the unit the trending ranker scores."""

    __tablename__ = "feedback"
    __table_args__ = (
        Index("ix_feedback_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: new_id("fb"))
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    state: Mapped[FeedbackState] = mapped_column(
        enum_type(FeedbackState),
        nullable=False,
        default=FeedbackState.NEW,
    )
    moderation_status: Mapped[ModerationStatus] = mapped_column(
        enum_type(ModerationStatus),
        nullable=False,
        default=ModerationStatus.PENDING_REVIEW,
    )
    village_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("village.id"),
        nullable=True,
    )
    author_id: Mapped[str] = mapped_column(String(32), ForeignKey("app_user.id"), nullable=False)
    feature_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("feature.id"),
        nullable=True,
    )

    author: Mapped[User] = relationship("User", lazy="joined")
    feature: Mapped[Feature | None] = relationship("Feature", lazy="joined")
    votes: Mapped[list[Vote]] = relationship(
        "Vote",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Vote.id",
    )
