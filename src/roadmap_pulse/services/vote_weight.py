"""Vote weight calculation.

A vote's *base weight* is frozen when it is cast::

    base = role_weight(voter.role) * village_weight(feedback.village.priority)
           + panel_boost            # once, if the voter sits on any active panel

Its *decayed weight* is derived on read with a continuous half-life::

    decayed = base * 2 ** (-days_since_cast / half_life_days)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.orm import Session

from roadmap_pulse.core.errors import NotFoundError
from roadmap_pulse.core.settings import (
    DEFAULT_PANEL_MEMBERSHIP_BOOST,
    DEFAULT_ROLE_WEIGHTS,
    DEFAULT_VILLAGE_PRIORITY_WEIGHTS,
    DEFAULT_VOTE_HALF_LIFE_DAYS,
    Settings,
    settings,
)
from roadmap_pulse.db.time import days_between, utcnow
from roadmap_pulse.models import Role, VillagePriority
from roadmap_pulse.repositories.feedback_repo import FeedbackRepository
from roadmap_pulse.repositories.user_repo import UserRepository
from roadmap_pulse.repositories.vote_repo import VoteRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteWeightConfig:
    """Multiplier tables and decay parameters used by the calculator."""

    role_weights: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_ROLE_WEIGHTS))
    village_priority_weights: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_VILLAGE_PRIORITY_WEIGHTS)
    )
    panel_membership_boost: float = DEFAULT_PANEL_MEMBERSHIP_BOOST
    half_life_days: float = DEFAULT_VOTE_HALF_LIFE_DAYS

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> VoteWeightConfig:
        """Build a config from application settings."""
        source = source or settings
        return cls(
            role_weights=dict(source.role_weights),
            village_priority_weights=dict(source.village_priority_weights),
            panel_membership_boost=source.panel_membership_boost,
            half_life_days=source.vote_half_life_days,
        )

    def role_weight(self, role: Role | str) -> float:
        """Return the multiplier for a role; unlisted roles count as 1.0."""
        key = role.value if isinstance(role, Role) else str(role)
        return float(self.role_weights.get(key, 1.0))

    def village_weight(self, priority: VillagePriority | str | None) -> float:
        """Return the multiplier for a village priority; unknown means medium."""
        if priority is None:
            key = VillagePriority.MEDIUM.value
        else:
            key = priority.value if isinstance(priority, VillagePriority) else str(priority)
        medium = self.village_priority_weights.get(VillagePriority.MEDIUM.value, 1.0)
        return float(self.village_priority_weights.get(key, medium))


def decay_weight(
    base: float,
    voted_at: datetime,
    now: datetime,
    half_life_days: float,
) -> float:
    """Return ``base`` decayed by the elapsed real-valued days since ``voted_at``.

    Votes stamped in the future (clock skew) are treated as cast at ``now``.
    """
    elapsed_days = max(0.0, days_between(voted_at, now))
    return base * 2.0 ** (-elapsed_days / half_life_days)


class VoteWeightCalculator:
    """Compute base and decayed vote weights from stored users and feedback."""

    def __init__(
        self,
        users: UserRepository,
        feedback: FeedbackRepository,
        votes: VoteRepository,
        config: VoteWeightConfig | None = None,
    ) -> None:
        """Initialize the calculator.

        Args:
            users: Repository resolving voters and their panel memberships.
            feedback: Repository resolving feedback items and villages.
            votes: Repository resolving stored votes for :meth:`current_weight`.
            config: Weight tables; defaults to values from settings.
        """
        self.users = users
        self.feedback = feedback
        self.votes = votes
        self.config = config or VoteWeightConfig.from_settings()

    @classmethod
    def from_session(
        cls,
        session: Session,
        config: VoteWeightConfig | None = None,
    ) -> VoteWeightCalculator:
        """Build a calculator whose repositories share one session."""
        return cls(
            UserRepository(session),
            FeedbackRepository(session),
            VoteRepository(session),
            config=config,
        )

    def base_weight(self, user_id: str, feedback_id: str) -> float:
        """Return the weight a vote by ``user_id`` on ``feedback_id`` would carry now.

        Raises:
            NotFoundError: If the user or the feedback item does not exist.
        """
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        feedback = self.feedback.get_by_id(feedback_id)
        if feedback is None:
            raise NotFoundError("Feedback", feedback_id)

        priority = None
        if feedback.village_id is not None:
            village = self.feedback.get_village(feedback.village_id)
            priority = village.priority if village is not None else None

        weight = self.config.role_weight(user.role) * self.config.village_weight(priority)
        if self.users.has_active_panel_membership(user_id):
            weight += self.config.panel_membership_boost

        logger.debug(
            "Base weight %.4f for user %s (role=%s) on feedback %s (village priority=%s)",
            weight,
            user_id,
            user.role,
            feedback_id,
            priority,
        )
        return weight

    def decayed_weight(
        self,
        base: float,
        voted_at: datetime,
        now: datetime | None = None,
    ) -> float:
        """Return ``base`` decayed with the configured half-life.

        Pure function of its arguments; ``now`` defaults to the current time.
        """
        return decay_weight(base, voted_at, now or utcnow(), self.config.half_life_days)

    def current_weight(self, vote_id: int, now: datetime | None = None) -> float:
        """Return the current decayed weight of a stored vote.

        Raises:
            NotFoundError: If the vote does not exist.
        """
        vote = self.votes.get_by_id(vote_id)
        if vote is None:
            raise NotFoundError("Vote", vote_id)
        return self.decayed_weight(vote.weight, vote.created_at, now)
