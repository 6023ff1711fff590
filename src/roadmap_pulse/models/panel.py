"""SQLAlchemy models for research panels, their quotas and members."""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roadmap_pulse.db.session import Base

from .common import new_id


class Panel(Base):
    """A research panel with a target size and composition quotas."""

    __tablename__ = "panel"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: new_id("pan"))
    name: Mapped[str] = mapped_column(Text, nullable=False)
    size_target: Mapped[int | None] = mapped_column(Integer, nullable=True)

    quotas: Mapped[list[PanelQuota]] = relationship(
        "PanelQuota",
        back_populates="panel",
        cascade="all, delete-orphan",
        order_by="PanelQuota.position",
    )
    memberships: Mapped[list[PanelMembership]] = relationship(
        "PanelMembership",
        back_populates="panel",
        cascade="all, delete-orphan",
    )


class PanelQuota(Base):
    """Target share of panel members for one categorical value.

    ``key`` names the member attribute (``role``, ``village_id``,
    ``department``...). ``value`` is optional: callers may instead pass an
    explicit quota-id to value mapping.
    """

    __tablename__ = "panel_quota"
    __table_args__ = (
        CheckConstraint(
            "target_percentage >= 0 AND target_percentage <= 100",
            name="ck_panel_quota_target_range",
        ),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: new_id("q"))
    panel_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("panel.id", ondelete="CASCADE"),
        nullable=False,
    )
    key: Mapped[str] = mapped_column(String(64), nullable=False)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_percentage: Mapped[float] = mapped_column(Float, nullable=False)
    # Display order within the panel.
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    panel: Mapped[Panel] = relationship("Panel", back_populates="quotas")


class PanelMembership(Base):
    """A user's seat on a panel with the attributes quotas are measured on."""

    __tablename__ = "panel_membership"

    panel_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("panel.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    village_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    employee_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    department: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Inactive seats keep history but count neither for quotas nor vote boosts.
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    panel: Mapped[Panel] = relationship("Panel", back_populates="memberships")
