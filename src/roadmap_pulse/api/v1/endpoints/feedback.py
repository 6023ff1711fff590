# src/roadmap_pulse/api/v1/endpoints/feedback.py
"""Feedback ranking endpoints: trending list and duplicate check."""

from typing import Annotated

from fastapi import APIRouter, Query

from roadmap_pulse.api.v1.dependencies import SessionDep
from roadmap_pulse.core.settings import settings
from roadmap_pulse.schemas.feedback import (
    DuplicateCandidateResponse,
    DuplicateCheckRequest,
    TrendingFeedbackResponse,
)
from roadmap_pulse.services.similarity import DuplicateFinder
from roadmap_pulse.services.trending import TrendingQuery, TrendingRanker

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.get("/trending", response_model=list[TrendingFeedbackResponse])
async def list_trending(
    db: SessionDep,
    limit: Annotated[int, Query(ge=1, le=100)] = settings.trending_widget_limit,
    max_age_in_days: Annotated[int, Query(ge=1, le=365)] = settings.trending_max_age_days,
    min_votes: Annotated[int, Query(ge=0)] = settings.trending_min_votes,
    area: str | None = None,
) -> list[TrendingFeedbackResponse]:
    """Return recent approved feedback ranked by decayed vote momentum."""
    query = TrendingQuery(
        max_age_in_days=max_age_in_days,
        limit=limit,
        min_votes=min_votes,
        area=area,
    )
    items = TrendingRanker.from_session(db).trending(query)
    return [TrendingFeedbackResponse.model_validate(item) for item in items]


@router.post("/duplicates", response_model=list[DuplicateCandidateResponse])
async def find_duplicates(
    payload: DuplicateCheckRequest,
    db: SessionDep,
) -> list[DuplicateCandidateResponse]:
    """Return existing feedback whose titles resemble ``payload.title``."""
    matches = DuplicateFinder.from_session(db).find_duplicates(
        payload.title,
        exclude_id=payload.exclude_id,
        threshold=payload.threshold,
    )
    return [DuplicateCandidateResponse.model_validate(match) for match in matches]
