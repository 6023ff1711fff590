"""Research panel quota progress and health.

A quota says "``target_percentage`` % of the panel should have ``key`` equal
to some value". Progress compares the active membership against that target
and classifies the gap in percentage points.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from roadmap_pulse.core.errors import NotFoundError
from roadmap_pulse.core.settings import Settings, settings
from roadmap_pulse.repositories.panel_repo import PanelRepository

logger = logging.getLogger(__name__)

UNKNOWN_VALUE = "unknown"

ON_TRACK = "on_track"
WARNING = "warning"
CRITICAL = "critical"


@dataclass(frozen=True)
class QuotaThresholds:
    """Largest absolute deviations still counted as on track / warning."""

    on_track: float = 5.0
    warning: float = 15.0

    def __post_init__(self) -> None:
        if not 0 <= self.on_track <= self.warning:
            raise ValueError("thresholds must satisfy 0 <= on_track <= warning")

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> QuotaThresholds:
        source = source or settings
        return cls(**source.quota_thresholds)


DEFAULT_THRESHOLDS = QuotaThresholds()


def quota_status(deviation: float, thresholds: QuotaThresholds = DEFAULT_THRESHOLDS) -> str:
    """Classify a deviation from target as on_track, warning or critical."""
    magnitude = abs(deviation)
    if magnitude <= thresholds.on_track:
        return ON_TRACK
    if magnitude <= thresholds.warning:
        return WARNING
    return CRITICAL


@dataclass(frozen=True, slots=True)
class QuotaProgress:
    quota_id: str
    key: str
    value: str
    target_percentage: float
    current_count: int
    total_members: int
    current_percentage: float
    deviation: float
    status: str


@dataclass(frozen=True, slots=True)
class QuotaHealth:
    total_quotas: int
    on_track: int
    warning: int
    critical: int
    avg_deviation: float
    health_score: float


def _field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _normalize(value: Any) -> str:
    if value is None:
        return UNKNOWN_VALUE
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class QuotaProgressTracker:
    """Measure panel composition against quotas."""

    def __init__(
        self,
        thresholds: QuotaThresholds | None = None,
        absolute_avg_deviation: bool | None = None,
    ) -> None:
        self.thresholds = thresholds or QuotaThresholds.from_settings()
        self.absolute_avg_deviation = (
            settings.quota_absolute_avg_deviation
            if absolute_avg_deviation is None
            else absolute_avg_deviation
        )

    def quota_progress(
        self,
        quotas: Iterable[Any],
        members: Sequence[Any],
        quota_values: Mapping[str, str] | None = None,
    ) -> list[QuotaProgress]:
        """Return progress for every quota that has a value to count.

        Args:
            quotas: Objects or mappings with ``id``, ``key`` and
                ``target_percentage`` (and optionally ``value``).
            members: Active members as objects or mappings; a missing or
                null attribute counts as ``"unknown"``.
            quota_values: Quota id to targeted value. When omitted each
                quota's own ``value`` is used.
        """
        quotas = list(quotas)
        total = len(members)
        if total == 0 or not quotas:
            return []

        progress: list[QuotaProgress] = []
        for quota in quotas:
            quota_id = _field(quota, "id")
            key = _field(quota, "key")
            if quota_values is not None:
                value = quota_values.get(quota_id)
            else:
                value = _field(quota, "value")
            if value is None:
                logger.warning("No value mapping for quota %s (key=%s); skipping", quota_id, key)
                continue

            expected = _normalize(value)
            count = sum(1 for member in members if _normalize(_field(member, key)) == expected)
            target = float(_field(quota, "target_percentage"))
            percentage = count / total * 100
            deviation = round(percentage - target, 2)
            progress.append(
                QuotaProgress(
                    quota_id=quota_id,
                    key=key,
                    value=expected,
                    target_percentage=target,
                    current_count=count,
                    total_members=total,
                    current_percentage=round(percentage, 2),
                    deviation=deviation,
                    status=quota_status(deviation, self.thresholds),
                )
            )
        return progress

    def health_summary(self, progress: Sequence[QuotaProgress]) -> QuotaHealth:
        """Summarise quota statuses into counts, mean deviation and a health score."""
        total = len(progress)
        if total == 0:
            return QuotaHealth(0, 0, 0, 0, avg_deviation=0.0, health_score=100.0)

        on_track = sum(1 for item in progress if item.status == ON_TRACK)
        warning = sum(1 for item in progress if item.status == WARNING)
        critical = sum(1 for item in progress if item.status == CRITICAL)
        if self.absolute_avg_deviation:
            deviations = [abs(item.deviation) for item in progress]
        else:
            deviations = [item.deviation for item in progress]
        return QuotaHealth(
            total_quotas=total,
            on_track=on_track,
            warning=warning,
            critical=critical,
            avg_deviation=round(sum(deviations) / total, 2),
            health_score=round(on_track / total * 100, 2),
        )


@dataclass(frozen=True, slots=True)
class PanelQuotaReport:
    panel_id: str
    progress: list[QuotaProgress]
    health: QuotaHealth


class PanelQuotaService:
    """Load a stored panel and report its quota progress."""

    def __init__(self, panels: PanelRepository, tracker: QuotaProgressTracker | None = None) -> None:
        self.panels = panels
        self.tracker = tracker or QuotaProgressTracker()

    @classmethod
    def from_session(cls, session: Session) -> PanelQuotaService:
        return cls(PanelRepository(session))

    def report(
        self,
        panel_id: str,
        quota_values: Mapping[str, str] | None = None,
    ) -> PanelQuotaReport:
        """Return progress and health for ``panel_id``.

        Raises:
            NotFoundError: If the panel does not exist.
        """
        panel = self.panels.get_with_quotas(panel_id)
        if panel is None:
            raise NotFoundError("Panel", panel_id)
        members = self.panels.list_active_members(panel_id)
        progress = self.tracker.quota_progress(panel.quotas, members, quota_values)
        health = self.tracker.health_summary(progress)
        logger.debug(
            "Panel %s quota health: %d quota(s), score %.2f",
            panel_id,
            health.total_quotas,
            health.health_score,
        )
        return PanelQuotaReport(panel_id=panel_id, progress=progress, health=health)
