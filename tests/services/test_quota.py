# tests/services/test_quota.py
"""Tests for panel quota progress and health."""

import logging

import pytest

from roadmap_pulse.core.errors import NotFoundError
from roadmap_pulse.services.quota import (
    PanelQuotaService,
    QuotaProgress,
    QuotaProgressTracker,
    QuotaThresholds,
    quota_status,
)


@pytest.fixture()
def tracker() -> QuotaProgressTracker:
    return QuotaProgressTracker(QuotaThresholds(), absolute_avg_deviation=False)


def _progress(quota_id: str, deviation: float, status: str) -> QuotaProgress:
    return QuotaProgress(
        quota_id=quota_id,
        key="role",
        value="PM",
        target_percentage=50.0,
        current_count=0,
        total_members=0,
        current_percentage=50.0 + deviation,
        deviation=deviation,
        status=status,
    )


MEMBERS = [
    {"user_id": "u1", "role": "PM", "department": "Ops"},
    {"user_id": "u2", "role": "PM", "department": "Ops"},
    {"user_id": "u3", "role": "USER"},
]


@pytest.mark.parametrize(
    ("deviation", "status"),
    [
        (0.0, "on_track"),
        (5.0, "on_track"),
        (-5.0, "on_track"),
        (5.01, "warning"),
        (-15.0, "warning"),
        (15.01, "critical"),
        (-40.0, "critical"),
    ],
)
def test_quota_status(deviation: float, status: str) -> None:
    assert quota_status(deviation) == status


def test_quota_status_custom_thresholds() -> None:
    assert quota_status(8.0, QuotaThresholds(on_track=10, warning=20)) == "on_track"


def test_thresholds_must_be_ordered() -> None:
    with pytest.raises(ValueError):
        QuotaThresholds(on_track=20, warning=10)


class TestQuotaProgress:
    def test_two_of_three_against_forty_percent(self, tracker) -> None:
        quotas = [{"id": "q1", "key": "role", "target_percentage": 40}]

        [progress] = tracker.quota_progress(quotas, MEMBERS, {"q1": "PM"})

        assert progress.current_count == 2
        assert progress.total_members == 3
        assert progress.current_percentage == 66.67
        assert progress.deviation == 26.67
        assert progress.status == "critical"

    def test_missing_attribute_counts_as_unknown(self, tracker) -> None:
        quotas = [{"id": "q1", "key": "department", "target_percentage": 30}]

        [progress] = tracker.quota_progress(quotas, MEMBERS, {"q1": "unknown"})

        assert progress.current_count == 1
        assert progress.current_percentage == 33.33
        assert progress.status == "on_track"

    def test_quota_without_mapping_is_skipped(self, tracker, caplog) -> None:
        quotas = [
            {"id": "q1", "key": "role", "target_percentage": 40},
            {"id": "q2", "key": "department", "target_percentage": 50},
        ]

        with caplog.at_level(logging.WARNING, logger="roadmap_pulse.services.quota"):
            progress = tracker.quota_progress(quotas, MEMBERS, {"q1": "PM"})

        assert [item.quota_id for item in progress] == ["q1"]
        assert "q2" in caplog.text

    def test_stored_value_is_used_without_mapping(self, tracker) -> None:
        quotas = [{"id": "q1", "key": "role", "value": "USER", "target_percentage": 33}]

        [progress] = tracker.quota_progress(quotas, MEMBERS)

        assert progress.current_count == 1
        assert progress.deviation == 0.33

    def test_no_members_gives_empty_progress(self, tracker) -> None:
        quotas = [{"id": "q1", "key": "role", "target_percentage": 40}]

        assert tracker.quota_progress(quotas, [], {"q1": "PM"}) == []

    def test_no_quotas_gives_empty_progress(self, tracker) -> None:
        assert tracker.quota_progress([], MEMBERS, {}) == []


class TestHealthSummary:
    PROGRESS = [
        _progress("q1", 2.0, "on_track"),
        _progress("q2", -2.0, "on_track"),
        _progress("q3", 10.0, "warning"),
    ]

    def test_signed_average_by_default(self, tracker) -> None:
        health = tracker.health_summary(self.PROGRESS)

        assert (health.total_quotas, health.on_track, health.warning, health.critical) == (3, 2, 1, 0)
        assert health.health_score == 66.67
        assert health.avg_deviation == 3.33

    def test_absolute_average_when_configured(self) -> None:
        tracker = QuotaProgressTracker(QuotaThresholds(), absolute_avg_deviation=True)

        assert tracker.health_summary(self.PROGRESS).avg_deviation == 4.67

    def test_empty_progress_is_healthy(self, tracker) -> None:
        health = tracker.health_summary([])

        assert health.total_quotas == 0
        assert health.health_score == 100.0
        assert health.avg_deviation == 0.0


class TestPanelQuotaService:
    def test_report_uses_active_members_and_stored_values(self, db_session, make_panel) -> None:
        panel = make_panel(
            quotas=[
                {"key": "role", "value": "PM", "target_percentage": 40},
                {"key": "village_id", "target_percentage": 50},
            ],
            members=[
                {"user_id": "u1", "role": "PM"},
                {"user_id": "u2", "role": "PM"},
                {"user_id": "u3", "role": "USER"},
                {"user_id": "u4", "role": "PM", "active": False},
            ],
        )
        service = PanelQuotaService(
            PanelQuotaService.from_session(db_session).panels,
            QuotaProgressTracker(QuotaThresholds(), absolute_avg_deviation=False),
        )

        report = service.report(panel.id)

        assert report.panel_id == panel.id
        assert [(item.key, item.deviation, item.status) for item in report.progress] == [
            ("role", 26.67, "critical"),
        ]
        assert report.health.critical == 1
        assert report.health.health_score == 0.0

    def test_explicit_mapping_overrides_stored_values(self, db_session, make_panel) -> None:
        panel = make_panel(
            quotas=[{"key": "role", "value": "PM", "target_percentage": 50}],
            members=[{"user_id": "u1", "role": "PM"}, {"user_id": "u2", "role": "USER"}],
        )
        quota_id = panel.quotas[0].id

        report = PanelQuotaService.from_session(db_session).report(panel.id, {quota_id: "USER"})

        assert report.progress[0].value == "USER"
        assert report.progress[0].current_percentage == 50.0

    def test_unknown_panel_raises(self, db_session) -> None:
        with pytest.raises(NotFoundError, match="Panel not found"):
            PanelQuotaService.from_session(db_session).report("pan_missing")
