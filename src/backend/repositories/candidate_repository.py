"""
Candidate repository for database operations.

Tally updates are expressed as in-store arithmetic so concurrent votes for
the same candidate never lose an increment.
"""

from typing import TYPE_CHECKING, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.candidate import Candidate
from models.vote import Vote

if TYPE_CHECKING:
    from sqlalchemy.engine import CursorResult


class CandidateRepository:
    """Repository for candidate database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Candidate]:
        """Get every candidate in insertion order."""
        result = await self.db.execute(
            select(Candidate).order_by(Candidate.id).execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        """Get the number of candidates on the ballot."""
        result = await self.db.execute(select(func.count(Candidate.id)))
        return result.scalar() or 0

    async def create_many(self, names: Sequence[str]) -> list[Candidate]:
        """Insert candidates with zero votes, in the given order."""
        candidates = [Candidate(name=name, votes=0) for name in names]
        self.db.add_all(candidates)
        await self.db.flush()
        return candidates

    async def increment_votes(self, candidate_id: int) -> bool:
        """
        Add one to a candidate's tally.

        Returns False if no candidate matched, so the caller can surface it
        instead of silently accepting a vote for nobody.
        """
        result: CursorResult = await self.db.execute(  # type: ignore[assignment]
            update(Candidate)
            .where(Candidate.id == candidate_id)
            .values(votes=Candidate.votes + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def recount_votes(self, candidate_id: int) -> None:
        """Overwrite a candidate's tally with its Vote row count, in one statement."""
        vote_rows = (
            select(func.count(Vote.id)).where(Vote.candidate_id == Candidate.id).scalar_subquery()
        )
        await self.db.execute(
            update(Candidate)
            .where(Candidate.id == candidate_id)
            .values(votes=vote_rows)
            .execution_options(synchronize_session=False)
        )

    async def get_recorded_tallies(self) -> dict[int, int]:
        """
        Count Vote rows per candidate.

        Returns: {candidate_id: vote_rows}, including candidates with no votes.
        """
        result = await self.db.execute(
            select(Candidate.id, func.count(Vote.id))
            .outerjoin(Vote, Vote.candidate_id == Candidate.id)
            .group_by(Candidate.id)
        )
        return {row[0]: row[1] for row in result.all()}
