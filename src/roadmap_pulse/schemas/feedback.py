# src/roadmap_pulse/schemas/feedback.py
"""Feedback ranking and duplicate-check schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from roadmap_pulse.models import FeedbackState


class AuthorSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    display_name: str | None = None


class FeatureSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    area: str


class TrendingFeedbackResponse(BaseModel):
    """A trending feedback item with the figures behind its score."""

    model_config = ConfigDict(from_attributes=True)

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


class DuplicateCheckRequest(BaseModel):
    """Candidate title to compare against existing feedback."""

    title: str = Field(..., min_length=1, max_length=500)
    exclude_id: str | None = Field(None, description="Feedback id to ignore, e.g. the item being edited")
    threshold: float | None = Field(None, ge=0.0, le=1.0, description="Minimum similarity to report")


class DuplicateCandidateResponse(BaseModel):
    """Existing feedback that looks like a duplicate of the candidate title."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    state: FeedbackState
    similarity: float
    level: str
