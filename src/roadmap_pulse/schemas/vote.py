# src/roadmap_pulse/schemas/vote.py
"""Vote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from roadmap_pulse.db.time import as_utc


class VoteResponse(BaseModel):
    """A stored vote as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    feedback_id: str
    user_id: str
    weight: float = Field(..., description="Base weight frozen when the vote was cast")
    decayed_weight: float | None = Field(None, description="Cached decayed weight, if refreshed")
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _tag_utc(cls, value: datetime) -> datetime:
        # SQLite returns naive timestamps; they are stored in UTC.
        return as_utc(value)


class VoteStatsResponse(BaseModel):
    """Aggregate vote figures for one feedback item."""

    model_config = ConfigDict(from_attributes=True)

    count: int
    total_weight: float
    total_decayed_weight: float


class VoteCastResponse(BaseModel):
    """Response body for a successful vote cast."""

    vote: VoteResponse
    stats: VoteStatsResponse


class VoteStatusResponse(BaseModel):
    """Whether the caller voted on an item and what the vote weighs today."""

    has_voted: bool
    vote: VoteResponse | None = None
    current_decayed_weight: float | None = None
