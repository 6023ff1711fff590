# src/roadmap_pulse/api/v1/endpoints/votes.py
"""Vote endpoints: cast, retract and inspect the caller's vote."""

from fastapi import APIRouter, Response, status

from roadmap_pulse.api.v1.dependencies import CurrentUserDep, SessionDep
from roadmap_pulse.schemas.vote import (
    VoteCastResponse,
    VoteResponse,
    VoteStatsResponse,
    VoteStatusResponse,
)
from roadmap_pulse.services.voting import VotingService

router = APIRouter(prefix="/feedback", tags=["votes"])


@router.post(
    "/{feedback_id}/vote",
    response_model=VoteCastResponse,
    status_code=status.HTTP_201_CREATED,
)
async def cast_vote(
    feedback_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteCastResponse:
    """Vote on a feedback item with the caller's current weight."""
    result = VotingService(db).cast_vote(current_user.id, feedback_id)
    db.commit()
    return VoteCastResponse(
        vote=VoteResponse.model_validate(result.vote),
        stats=VoteStatsResponse.model_validate(result.stats),
    )


@router.delete("/{feedback_id}/vote", status_code=status.HTTP_204_NO_CONTENT)
async def retract_vote(
    feedback_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Remove the caller's vote from a feedback item."""
    VotingService(db).retract_vote(current_user.id, feedback_id)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{feedback_id}/vote", response_model=VoteStatusResponse)
async def get_vote_status(
    feedback_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteStatusResponse:
    """Return whether the caller voted and the vote's current decayed weight."""
    vote_status = VotingService(db).vote_status(current_user.id, feedback_id)
    return VoteStatusResponse(
        has_voted=vote_status.has_voted,
        vote=VoteResponse.model_validate(vote_status.vote) if vote_status.vote else None,
        current_decayed_weight=vote_status.current_decayed_weight,
    )
