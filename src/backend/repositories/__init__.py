"""Repository modules for database access."""

from repositories.candidate_repository import CandidateRepository
from repositories.vote_repository import VoteRepository

__all__ = [
    "CandidateRepository",
    "VoteRepository",
]
