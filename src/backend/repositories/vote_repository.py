"""
Vote repository for database operations.

Votes are insert-only; there is no update or delete path.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.vote import Vote


class VoteRepository:
    """Repository for vote database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists_by_voter(self, voter_identifier: str) -> bool:
        """Check if a voter identifier has already voted (for duplicate detection)."""
        result = await self.db.execute(
            select(func.count(Vote.id)).where(Vote.voter_identifier == voter_identifier)
        )
        count = result.scalar() or 0
        return count > 0

    async def create(self, candidate_id: int, voter_identifier: str) -> Vote:
        """
        Create a vote record.

        Flushes immediately so a unique-constraint violation on
        voter_identifier surfaces here as IntegrityError.
        """
        vote = Vote(
            candidate_id=candidate_id,
            voter_identifier=voter_identifier,
        )

        self.db.add(vote)
        await self.db.flush()

        return vote

    async def count_all(self) -> int:
        """Get total number of accepted votes."""
        result = await self.db.execute(select(func.count(Vote.id)))
        return result.scalar() or 0
