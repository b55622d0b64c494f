"""
Vote-related Pydantic schemas.

Input shapes are validated here, before any store access.
"""

from pydantic import BaseModel, Field

from models.candidate import CANDIDATE_ID_MAX
from schemas.candidate import CandidateResponse

VOTER_IDENTIFIER_MAX_LENGTH = 255


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    candidate_id: int = Field(..., gt=0, le=CANDIDATE_ID_MAX, description="ID of the chosen candidate")
    voter_identifier: str = Field(
        ...,
        min_length=1,
        max_length=VOTER_IDENTIFIER_MAX_LENGTH,
        description="Opaque client-derived identifier (public IP or device fingerprint)",
    )


class VoteResponse(BaseModel):
    """Response after successfully casting a vote, with the refreshed tallies."""

    success: bool = True
    candidates: list[CandidateResponse]


class VoteStatus(BaseModel):
    """Whether a voter identifier has already voted."""

    voter_identifier: str
    has_voted: bool


class ErrorResponse(BaseModel):
    """Structured error body for ledger failures."""

    detail: str
    code: str
