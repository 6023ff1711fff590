"""Cast, retract and inspect votes on feedback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roadmap_pulse.core.errors import AlreadyVotedError, NotFoundError
from roadmap_pulse.db.time import utcnow
from roadmap_pulse.models import Feedback, Vote
from roadmap_pulse.repositories.feedback_repo import FeedbackRepository
from roadmap_pulse.repositories.vote_repo import VoteRepository
from roadmap_pulse.services.vote_aggregator import VoteAggregator, VoteStats
from roadmap_pulse.services.vote_weight import VoteWeightCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CastResult:
    vote: Vote
    stats: VoteStats


@dataclass(frozen=True, slots=True)
class VoteStatus:
    has_voted: bool
    vote: Vote | None
    current_decayed_weight: float | None


class VotingService:
    """Orchestrate vote writes for a single session.

    The service flushes but never commits; the caller owns the transaction.
    """

    def __init__(self, session: Session, calculator: VoteWeightCalculator | None = None) -> None:
        self.session = session
        self.feedback = FeedbackRepository(session)
        self.votes = VoteRepository(session)
        self.calculator = calculator or VoteWeightCalculator.from_session(session)
        self.aggregator = VoteAggregator(self.votes, self.calculator)

    def _get_feedback(self, feedback_id: str) -> Feedback:
        feedback = self.feedback.get_by_id(feedback_id)
        if feedback is None:
            raise NotFoundError("Feedback", feedback_id)
        return feedback

    def cast_vote(self, user_id: str, feedback_id: str, now: datetime | None = None) -> CastResult:
        """Record a vote with its base weight frozen at cast time.

        Raises:
            NotFoundError: If the feedback item or the user does not exist.
            AlreadyVotedError: If the user already voted on this item,
                including when a concurrent cast wins the unique constraint.
        """
        self._get_feedback(feedback_id)
        if self.votes.exists_for_user(user_id, feedback_id):
            raise AlreadyVotedError(user_id, feedback_id)

        now = now or utcnow()
        weight = self.calculator.base_weight(user_id, feedback_id)
        try:
            with self.session.begin_nested():
                vote = self.votes.create(
                    feedback_id=feedback_id,
                    user_id=user_id,
                    weight=weight,
                    decayed_weight=weight,
                    created_at=now,
                )
        except IntegrityError as exc:
            raise AlreadyVotedError(user_id, feedback_id) from exc

        stats = self.aggregator.stats(feedback_id, now)
        logger.info(
            "User %s voted on feedback %s with weight %.4f (%d vote(s) total)",
            user_id,
            feedback_id,
            weight,
            stats.count,
        )
        return CastResult(vote=vote, stats=stats)

    def retract_vote(self, user_id: str, feedback_id: str) -> None:
        """Delete the caller's vote on a feedback item.

        Raises:
            NotFoundError: If the feedback item or the vote does not exist.
        """
        self._get_feedback(feedback_id)
        vote = self.votes.get_for_user(user_id, feedback_id)
        if vote is None:
            raise NotFoundError("Vote", f"user {user_id} on feedback {feedback_id}")
        self.votes.delete(vote)
        logger.info("User %s retracted vote on feedback %s", user_id, feedback_id)

    def vote_status(
        self,
        user_id: str,
        feedback_id: str,
        now: datetime | None = None,
    ) -> VoteStatus:
        """Return whether the caller voted and what the vote weighs today."""
        self._get_feedback(feedback_id)
        vote = self.votes.get_for_user(user_id, feedback_id)
        if vote is None:
            return VoteStatus(has_voted=False, vote=None, current_decayed_weight=None)
        return VoteStatus(
            has_voted=True,
            vote=vote,
            current_decayed_weight=self.calculator.decayed_weight(vote.weight, vote.created_at, now),
        )
