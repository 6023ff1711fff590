# src/roadmap_pulse/api/v1/endpoints/panels.py
"""Research panel endpoints."""

from fastapi import APIRouter

from roadmap_pulse.api.v1.dependencies import SessionDep
from roadmap_pulse.schemas.panel import PanelQuotaReportResponse
from roadmap_pulse.services.quota import PanelQuotaService

router = APIRouter(prefix="/panels", tags=["panels"])


@router.get("/{panel_id}/quotas", response_model=PanelQuotaReportResponse)
async def get_quota_report(panel_id: str, db: SessionDep) -> PanelQuotaReportResponse:
    """Return quota progress and health for a panel's active members."""
    report = PanelQuotaService.from_session(db).report(panel_id)
    return PanelQuotaReportResponse.model_validate(report)
