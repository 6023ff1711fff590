# src/roadmap_pulse/schemas/panel.py
"""Panel quota report schemas."""

from pydantic import BaseModel, ConfigDict


class QuotaProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quota_id: str
    key: str
    value: str
    target_percentage: float
    current_count: int
    total_members: int
    current_percentage: float
    deviation: float
    status: str


class QuotaHealthResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_quotas: int
    on_track: int
    warning: int
    critical: int
    avg_deviation: float
    health_score: float


class PanelQuotaReportResponse(BaseModel):
    """Quota progress and overall health for a panel."""

    model_config = ConfigDict(from_attributes=True)

    panel_id: str
    progress: list[QuotaProgressResponse]
    health: QuotaHealthResponse
