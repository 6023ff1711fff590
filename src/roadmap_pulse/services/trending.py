"""Trending feedback ranking.

A feedback item's trending score is its total decayed vote weight divided by
its age in days, with the age floored at 0.1 so brand-new items do not
divide by zero::

    score = total_decayed_weight / max(0.1, age_in_days)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from roadmap_pulse.core.settings import Settings, settings
from roadmap_pulse.db.time import as_utc, days_between, utcnow
from roadmap_pulse.models import Feedback, FeedbackState
from roadmap_pulse.repositories.feedback_repo import FeedbackRepository
from roadmap_pulse.services.vote_aggregator import VoteAggregator

logger = logging.getLogger(__name__)

MIN_AGE_DAYS = 0.1


@dataclass(frozen=True)
class TrendingQuery:
    """Selection and paging parameters for a trending request."""

    max_age_in_days: int = 14
    limit: int = 10
    min_votes: int = 1
    area: str | None = None

    def __post_init__(self) -> None:
        if self.max_age_in_days <= 0:
            raise ValueError("max_age_in_days must be positive")
        if self.limit < 0:
            raise ValueError("limit must not be negative")
        if self.min_votes < 0:
            raise ValueError("min_votes must not be negative")

    @classmethod
    def from_settings(cls, source: Settings | None = None, **overrides) -> TrendingQuery:
        source = source or settings
        query = cls(
            max_age_in_days=source.trending_max_age_days,
            limit=source.trending_limit,
            min_votes=source.trending_min_votes,
        )
        return replace(query, **overrides) if overrides else query


@dataclass(frozen=True, slots=True)
class AuthorSummary:
    id: str
    display_name: str | None


@dataclass(frozen=True, slots=True)
class FeatureSummary:
    id: str
    title: str
    area: str


@dataclass(frozen=True, slots=True)
class TrendingItem:
    """A ranked feedback item with the figures its score was built from."""

    id: str
    title: str
    body: str
    created_at: datetime
    state: FeedbackState
    vote_count: int
    total_decayed_weight: float
    trending_score: float
    author: AuthorSummary | None = None
    feature: FeatureSummary | None = None


def trending_score(total_decayed_weight: float, age_in_days: float) -> float:
    """Return the trending score for a total decayed weight and an age."""
    return total_decayed_weight / max(MIN_AGE_DAYS, age_in_days)


def _ranking_key(item: TrendingItem) -> tuple[float, float, str]:
    # Score descending, then newest first, then id ascending.
    return (-item.trending_score, -as_utc(item.created_at).timestamp(), item.id)


class TrendingRanker:
    """Rank recent, approved, open feedback by decayed vote momentum."""

    def __init__(
        self,
        repo: FeedbackRepository,
        aggregator: VoteAggregator,
        defaults: TrendingQuery | None = None,
    ) -> None:
        self.repo = repo
        self.aggregator = aggregator
        self.defaults = defaults or TrendingQuery.from_settings()

    @classmethod
    def from_session(cls, session: Session, defaults: TrendingQuery | None = None) -> TrendingRanker:
        return cls(FeedbackRepository(session), VoteAggregator.from_session(session), defaults)

    def _to_item(self, feedback: Feedback, now: datetime) -> TrendingItem:
        stats = self.aggregator.summarize(feedback.votes, now)
        age_in_days = days_between(feedback.created_at, now)
        author = None
        if feedback.author is not None:
            author = AuthorSummary(id=feedback.author.id, display_name=feedback.author.display_name)
        feature = None
        if feedback.feature is not None:
            feature = FeatureSummary(
                id=feedback.feature.id,
                title=feedback.feature.title,
                area=feedback.feature.area,
            )
        return TrendingItem(
            id=feedback.id,
            title=feedback.title,
            body=feedback.body,
            created_at=as_utc(feedback.created_at),
            state=feedback.state,
            vote_count=stats.count,
            total_decayed_weight=stats.total_decayed_weight,
            trending_score=trending_score(stats.total_decayed_weight, age_in_days),
            author=author,
            feature=feature,
        )

    def trending(
        self,
        query: TrendingQuery | None = None,
        now: datetime | None = None,
    ) -> list[TrendingItem]:
        """Return at most ``query.limit`` items ordered by trending score.

        Items with fewer than ``query.min_votes`` votes are left out. The
        result is empty when nothing qualifies.
        """
        query = query or self.defaults
        now = now or utcnow()
        cutoff = now - timedelta(days=query.max_age_in_days)

        items = [
            self._to_item(feedback, now)
            for feedback in self.repo.list_trending_candidates(cutoff, area=query.area)
        ]
        items = [item for item in items if item.vote_count >= query.min_votes]
        items.sort(key=_ranking_key)
        ranked = items[: query.limit]

        logger.debug(
            "Trending (max_age=%sd, min_votes=%s, area=%s): %d candidate(s), returning %d",
            query.max_age_in_days,
            query.min_votes,
            query.area,
            len(items),
            len(ranked),
        )
        return ranked

    def trending_for_area(
        self,
        area: str,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> list[TrendingItem]:
        """Return trending items for one product area, widget-sized by default."""
        query = replace(
            self.defaults,
            area=area,
            limit=settings.trending_widget_limit if limit is None else limit,
        )
        return self.trending(query, now)
