# tests/services/test_weight_refresh.py
"""Tests for the cached decayed-weight refresher."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from roadmap_pulse.models import Vote
from roadmap_pulse.services.vote_weight import VoteWeightCalculator
from roadmap_pulse.services.weight_refresh import DecayedWeightRefresher


@pytest.fixture()
def refresher(db_session, weight_config) -> DecayedWeightRefresher:
    calculator = VoteWeightCalculator.from_session(db_session, config=weight_config)
    return DecayedWeightRefresher(db_session, calculator=calculator)


def _cached(db_session, vote_id: int) -> float | None:
    return db_session.get(Vote, vote_id, populate_existing=True).decayed_weight


def test_refresh_feedback_writes_decayed_weights(
    db_session, refresher, make_feedback, make_vote, now
) -> None:
    feedback = make_feedback()
    fresh = make_vote(feedback, weight=2.0, created_at=now)
    old = make_vote(feedback, weight=2.0, created_at=now - timedelta(days=180))

    report = refresher.refresh_feedback(feedback.id, now)

    assert report.updated == 2
    assert report.failed == []
    assert _cached(db_session, fresh.id) == pytest.approx(2.0)
    assert _cached(db_session, old.id) == pytest.approx(1.0)


def test_refresh_is_idempotent_for_fixed_now(
    db_session, refresher, make_feedback, make_vote, now
) -> None:
    vote = make_vote(make_feedback(), weight=1.5, created_at=now - timedelta(days=90))

    refresher.refresh_all(now)
    first = _cached(db_session, vote.id)
    refresher.refresh_all(now)

    assert _cached(db_session, vote.id) == first


def test_refresh_all_covers_every_voted_feedback(
    db_session, refresher, make_feedback, make_vote, now
) -> None:
    votes = [make_vote(make_feedback(), weight=1.0, created_at=now) for _ in range(3)]
    make_feedback()

    report = refresher.refresh_all(now)

    assert report.updated == 3
    assert all(_cached(db_session, vote.id) == pytest.approx(1.0) for vote in votes)


def test_failed_write_is_isolated(
    db_session, refresher, make_feedback, make_vote, now, mocker
) -> None:
    feedback = make_feedback()
    broken = make_vote(feedback, weight=1.0, created_at=now, decayed_weight=7.0)
    healthy = make_vote(feedback, weight=1.0, created_at=now, decayed_weight=7.0)

    original = refresher.votes.update_decayed_weight

    def flaky_update(vote_id: int, value: float) -> None:
        if vote_id == broken.id:
            raise OperationalError("UPDATE vote", {}, Exception("database is locked"))
        original(vote_id, value)

    mocker.patch.object(refresher.votes, "update_decayed_weight", side_effect=flaky_update)

    report = refresher.refresh_feedback(feedback.id, now)

    assert report.updated == 1
    assert report.failed == [broken.id]
    assert _cached(db_session, broken.id) == pytest.approx(7.0)
    assert _cached(db_session, healthy.id) == pytest.approx(1.0)


def test_refresh_all_logs_summary(refresher, make_feedback, make_vote, now, caplog) -> None:
    make_vote(make_feedback(), created_at=now)

    with caplog.at_level("INFO", logger="roadmap_pulse.services.weight_refresh"):
        refresher.refresh_all(now)

    assert "1 updated, 0 failed" in caplog.text
