"""Data access helpers for research panels."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from roadmap_pulse.models import Panel, PanelMembership

__all__ = ["PanelRepository"]


class PanelRepository:
    """Thin wrapper around database access for panels and memberships."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_with_quotas(self, panel_id: str) -> Panel | None:
        """Return a panel with its quotas eagerly loaded."""
        result = self.session.execute(
            select(Panel).where(Panel.id == panel_id).options(selectinload(Panel.quotas))
        )
        return result.scalars().first()

    def list_active_members(self, panel_id: str) -> list[PanelMembership]:
        """Return active memberships of a panel."""
        result = self.session.execute(
            select(PanelMembership)
            .where(PanelMembership.panel_id == panel_id, PanelMembership.active.is_(True))
            .order_by(PanelMembership.user_id)
        )
        return list(result.scalars())
