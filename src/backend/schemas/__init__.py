"""Schemas module initialization."""

from schemas.candidate import CandidateResponse
from schemas.vote import ErrorResponse, VoteCreate, VoteResponse, VoteStatus

__all__ = [
    "CandidateResponse",
    "VoteCreate",
    "VoteResponse",
    "VoteStatus",
    "ErrorResponse",
]
