"""Per-feedback vote totals."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from roadmap_pulse.db.time import utcnow
from roadmap_pulse.models import Vote
from roadmap_pulse.repositories.vote_repo import VoteRepository
from roadmap_pulse.services.vote_weight import VoteWeightCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VoteStats:
    """Aggregate vote figures for one feedback item."""

    count: int
    total_weight: float
    total_decayed_weight: float


class VoteAggregator:
    """Summarise the votes on a feedback item."""

    def __init__(self, votes: VoteRepository, calculator: VoteWeightCalculator) -> None:
        self.votes = votes
        self.calculator = calculator

    @classmethod
    def from_session(
        cls,
        session: Session,
        calculator: VoteWeightCalculator | None = None,
    ) -> VoteAggregator:
        return cls(VoteRepository(session), calculator or VoteWeightCalculator.from_session(session))

    def summarize(self, votes: Iterable[Vote], now: datetime) -> VoteStats:
        """Fold already-loaded votes into :class:`VoteStats`.

        Decayed totals come from the frozen base weights at ``now``; the
        cached ``decayed_weight`` column is not consulted.
        """
        count = 0
        total_weight = 0.0
        total_decayed = 0.0
        for vote in votes:
            count += 1
            total_weight += vote.weight
            total_decayed += self.calculator.decayed_weight(vote.weight, vote.created_at, now)
        return VoteStats(count=count, total_weight=total_weight, total_decayed_weight=total_decayed)

    def stats(self, feedback_id: str, now: datetime | None = None) -> VoteStats:
        """Return count, base total and decayed total for ``feedback_id``.

        Unknown feedback simply has no votes.
        """
        result = self.summarize(self.votes.list_for_feedback(feedback_id), now or utcnow())
        logger.debug("Vote stats for feedback %s: %s", feedback_id, result)
        return result

    def has_voted(self, user_id: str, feedback_id: str) -> bool:
        """Return whether ``user_id`` has a vote on ``feedback_id``."""
        return self.votes.exists_for_user(user_id, feedback_id)
