"""SQLAlchemy models for users and the villages they belong to."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from roadmap_pulse.db.session import Base

from .common import Role, VillagePriority, enum_type, new_id


class Village(Base):
    """A physical site; its priority scales votes on feedback raised there."""

    __tablename__ = "village"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: new_id("vil"))
    name: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[VillagePriority] = mapped_column(
        enum_type(VillagePriority),
        nullable=False,
        default=VillagePriority.MEDIUM,
    )


class User(Base):
    """Voter and panel-member identity. Read-only for the ranking core."""

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: new_id("usr"))
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[Role] = mapped_column(enum_type(Role), nullable=False, default=Role.USER)
    current_village_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("village.id"),
        nullable=True,
    )
