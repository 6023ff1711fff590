"""Pydantic schemas for the API layer."""

from .feedback import (
    DuplicateCandidateResponse,
    DuplicateCheckRequest,
    TrendingFeedbackResponse,
)
from .panel import PanelQuotaReportResponse, QuotaHealthResponse, QuotaProgressResponse
from .vote import VoteCastResponse, VoteResponse, VoteStatsResponse, VoteStatusResponse

__all__ = [
    "DuplicateCandidateResponse",
    "DuplicateCheckRequest",
    "PanelQuotaReportResponse",
    "QuotaHealthResponse",
    "QuotaProgressResponse",
    "TrendingFeedbackResponse",
    "VoteCastResponse",
    "VoteResponse",
    "VoteStatsResponse",
    "VoteStatusResponse",
]
