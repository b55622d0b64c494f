"""
Voting endpoints.

Three operations make up the whole boundary: list the ballot, check whether
a voter identifier has voted, and cast a vote. Ledger errors are turned into
structured responses by the application's exception handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.deps import get_vote_ledger
from schemas.candidate import CandidateResponse
from schemas.vote import VOTER_IDENTIFIER_MAX_LENGTH, ErrorResponse, VoteCreate, VoteResponse, VoteStatus
from services.vote_ledger import VoteLedger

router = APIRouter()


@router.get("/candidates", response_model=list[CandidateResponse])
async def get_candidates(
    ledger: Annotated[VoteLedger, Depends(get_vote_ledger)],
) -> list[CandidateResponse]:
    """
    List the ballot with current tallies.

    Seeds the ballot on first access. Returns an empty list if the store is
    unavailable.
    """
    candidates = await ledger.list_candidates()
    return [CandidateResponse.model_validate(c) for c in candidates]


@router.get("/has-voted", response_model=VoteStatus)
async def has_voted(
    ledger: Annotated[VoteLedger, Depends(get_vote_ledger)],
    voter_identifier: str = Query(..., min_length=1, max_length=VOTER_IDENTIFIER_MAX_LENGTH),
) -> VoteStatus:
    """Check whether a voter identifier has already voted."""
    return VoteStatus(
        voter_identifier=voter_identifier,
        has_voted=await ledger.has_voted(voter_identifier),
    )


@router.post(
    "/vote",
    response_model=VoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)
async def cast_vote(
    vote_data: VoteCreate,
    ledger: Annotated[VoteLedger, Depends(get_vote_ledger)],
) -> VoteResponse:
    """
    Cast the single vote allowed for a voter identifier.

    Returns the refreshed ballot so the client can render the new tallies
    without a second request.
    """
    candidates = await ledger.cast_vote(vote_data.candidate_id, vote_data.voter_identifier)
    return VoteResponse(
        success=True,
        candidates=[CandidateResponse.model_validate(c) for c in candidates],
    )
