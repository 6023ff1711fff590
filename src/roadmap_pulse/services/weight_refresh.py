"""Batch write-back of cached decayed vote weights."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roadmap_pulse.db.time import utcnow
from roadmap_pulse.repositories.vote_repo import VoteRepository
from roadmap_pulse.services.vote_weight import VoteWeightCalculator

logger = logging.getLogger(__name__)


@dataclass
class RefreshReport:
    """Outcome of a refresh run."""

    updated: int = 0
    failed: list[int] = field(default_factory=list)

    def merge(self, other: RefreshReport) -> None:
        self.updated += other.updated
        self.failed.extend(other.failed)


class DecayedWeightRefresher:
    """Recompute and persist ``Vote.decayed_weight`` from frozen base weights.

    Each vote is written inside its own savepoint so a failing row is rolled
    back alone and the rest of the batch still lands. The caller owns the
    outer transaction and commits it.
    """

    def __init__(self, session: Session, calculator: VoteWeightCalculator | None = None) -> None:
        self.session = session
        self.votes = VoteRepository(session)
        self.calculator = calculator or VoteWeightCalculator.from_session(session)

    def refresh_feedback(self, feedback_id: str, now: datetime | None = None) -> RefreshReport:
        """Refresh the cached decayed weight of every vote on one feedback item."""
        now = now or utcnow()
        report = RefreshReport()
        for vote in self.votes.list_for_feedback(feedback_id):
            vote_id = vote.id
            decayed = self.calculator.decayed_weight(vote.weight, vote.created_at, now)
            try:
                with self.session.begin_nested():
                    self.votes.update_decayed_weight(vote_id, decayed)
            except SQLAlchemyError as exc:
                logger.warning(
                    "Failed to refresh decayed weight for vote %s on feedback %s: %s",
                    vote_id,
                    feedback_id,
                    exc,
                )
                report.failed.append(vote_id)
                continue
            report.updated += 1
        return report

    def refresh_all(self, now: datetime | None = None) -> RefreshReport:
        """Refresh every feedback item that currently holds votes."""
        now = now or utcnow()
        report = RefreshReport()
        feedback_ids = self.votes.list_voted_feedback_ids()
        for feedback_id in feedback_ids:
            report.merge(self.refresh_feedback(feedback_id, now))
        logger.info(
            "Refreshed decayed weights on %d feedback item(s): %d updated, %d failed",
            len(feedback_ids),
            report.updated,
            len(report.failed),
        )
        return report
