# tests/services/test_vote_aggregator.py
"""Tests for per-feedback vote totals."""

from datetime import timedelta

import pytest

from roadmap_pulse.services.vote_aggregator import VoteAggregator, VoteStats
from roadmap_pulse.services.vote_weight import VoteWeightCalculator


@pytest.fixture()
def aggregator(db_session, weight_config) -> VoteAggregator:
    calculator = VoteWeightCalculator.from_session(db_session, config=weight_config)
    return VoteAggregator.from_session(db_session, calculator=calculator)


def test_stats_for_feedback_without_votes(aggregator, make_feedback, now) -> None:
    feedback = make_feedback()

    assert aggregator.stats(feedback.id, now) == VoteStats(0, 0.0, 0.0)


def test_stats_sum_base_and_decayed_weights(aggregator, make_feedback, make_vote, now) -> None:
    feedback = make_feedback()
    make_vote(feedback, weight=2.0, created_at=now)
    make_vote(feedback, weight=1.0, created_at=now - timedelta(days=180))
    make_vote(feedback, weight=3.0, created_at=now - timedelta(days=360))

    stats = aggregator.stats(feedback.id, now)

    assert stats.count == 3
    assert stats.total_weight == pytest.approx(6.0)
    assert stats.total_decayed_weight == pytest.approx(2.0 + 0.5 + 0.75)


def test_decayed_total_matches_per_vote_decay(aggregator, make_feedback, make_vote, now) -> None:
    feedback = make_feedback()
    votes = [
        make_vote(feedback, weight=weight, created_at=now - timedelta(days=days))
        for weight, days in ((1.0, 3), (1.8, 41.5), (4.5, 200))
    ]

    stats = aggregator.stats(feedback.id, now)
    expected = sum(
        aggregator.calculator.decayed_weight(vote.weight, vote.created_at, now) for vote in votes
    )

    assert stats.total_decayed_weight == pytest.approx(expected)


def test_cached_decayed_column_is_ignored(aggregator, make_feedback, make_vote, now) -> None:
    feedback = make_feedback()
    make_vote(feedback, weight=2.0, created_at=now, decayed_weight=99.0)

    assert aggregator.stats(feedback.id, now).total_decayed_weight == pytest.approx(2.0)


def test_stats_only_count_the_requested_feedback(aggregator, make_feedback, make_vote, now) -> None:
    first, second = make_feedback(), make_feedback()
    make_vote(first)
    make_vote(second)
    make_vote(second)

    assert aggregator.stats(first.id, now).count == 1
    assert aggregator.stats(second.id, now).count == 2


def test_has_voted(aggregator, make_feedback, make_user, make_vote) -> None:
    feedback = make_feedback()
    voter, bystander = make_user(), make_user()
    make_vote(feedback, user=voter)

    assert aggregator.has_voted(voter.id, feedback.id) is True
    assert aggregator.has_voted(bystander.id, feedback.id) is False
