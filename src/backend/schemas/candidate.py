"""
Candidate-related Pydantic schemas.
"""

from pydantic import BaseModel, Field


class CandidateResponse(BaseModel):
    """A ballot entry with its current tally."""

    id: int
    name: str
    votes: int = Field(..., ge=0, description="Accepted votes for this candidate")

    model_config = {"from_attributes": True}
