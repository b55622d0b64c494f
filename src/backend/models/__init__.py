"""Database models module."""

from models.candidate import Candidate
from models.vote import Vote

__all__ = [
    "Candidate",
    "Vote",
]
