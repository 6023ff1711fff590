"""Models capturing weighted votes on feedback."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from roadmap_pulse.db.session import Base
from roadmap_pulse.db.time import utcnow


class Vote(Base):
    """One user's endorsement of one feedback item.

    ``weight`` is the base weight frozen when the vote is cast. Decay is
    computed on read; ``decayed_weight`` is only a cached value maintained by
    the batch refresher.
    """

    __tablename__ = "vote"
    __table_args__ = (
        # One vote per user per feedback item; concurrent casts race on this.
        UniqueConstraint("feedback_id", "user_id", name="uq_vote_feedback_user"),
        CheckConstraint("weight >= 0", name="ck_vote_weight_non_negative"),
        Index("ix_vote_feedback_id", "feedback_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    feedback_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("feedback.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    decayed_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
