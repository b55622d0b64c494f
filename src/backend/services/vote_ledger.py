"""
Vote ledger service.

Owns the ballot and the set of accepted votes. Guarantees that a voter
identifier contributes at most one vote and that every candidate's tally
matches the vote rows that reference it.

Read paths (list_candidates, has_voted, vote_summary) degrade to empty/false
when the store is unavailable. The write path (cast_vote) never degrades:
any failure to persist is raised to the caller.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Sequence

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.config import settings
from core.exceptions import CandidateNotFound, DuplicateVote, StoreUnavailable
from db.session import Database
from models.candidate import CANDIDATE_ID_MAX, Candidate
from repositories.candidate_repository import CandidateRepository
from repositories.vote_repository import VoteRepository

logger = structlog.get_logger(__name__)


@dataclass
class VoteSummary:
    """Ledger-wide totals."""

    candidates: int
    total_votes: int

    def to_dict(self) -> dict:
        return {"candidates": self.candidates, "total_votes": self.total_votes}


class VoteLedger:
    """
    Single-use ballot backed by the candidates and votes tables.

    Usage:
        ledger = VoteLedger(database)
        candidates = await ledger.list_candidates()
        if not await ledger.has_voted("203.0.113.7"):
            candidates = await ledger.cast_vote(candidates[0].id, "203.0.113.7")
    """

    def __init__(
        self,
        database: Database,
        seed_names: Optional[Sequence[str]] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self.database = database
        self.seed_names = list(seed_names) if seed_names is not None else settings.seed_candidates_list
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.STORE_TIMEOUT_SECONDS
        )

    async def _run(self, operation: Callable[..., Awaitable[Any]], *args: Any) -> Any:
        """Run a store operation under the timeout, mapping store failures to StoreUnavailable."""
        try:
            return await asyncio.wait_for(operation(*args), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise StoreUnavailable(f"Store did not answer within {self.timeout_seconds}s") from e
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(str(e)) from e

    # =========================================================================
    # Reads
    # =========================================================================

    async def list_candidates(self) -> list[Candidate]:
        """
        Get the ballot with current tallies, seeding it on first access.

        Returns an empty list if the store is unavailable.
        """
        try:
            return await self._run(self._load_candidates)
        except StoreUnavailable as e:
            logger.warning("Cannot list candidates: store unavailable", error=str(e))
            return []

    async def has_voted(self, voter_identifier: str) -> bool:
        """Check whether a voter identifier already has a vote. False if the store is unavailable."""
        try:
            return await self._run(self._voter_exists, voter_identifier)
        except StoreUnavailable as e:
            logger.warning("Cannot check vote: store unavailable", error=str(e))
            return False

    async def vote_summary(self) -> VoteSummary:
        """Get ballot size and total votes. Zeros if the store is unavailable."""
        try:
            return await self._run(self._summarize)
        except StoreUnavailable as e:
            logger.warning("Cannot summarize votes: store unavailable", error=str(e))
            return VoteSummary(candidates=0, total_votes=0)

    async def _load_candidates(self) -> list[Candidate]:
        async with self.database.session() as session:
            repo = CandidateRepository(session)
            candidates = await repo.list_all()
            if candidates or not self.seed_names:
                return candidates

            try:
                await repo.create_many(self.seed_names)
                await session.commit()
                logger.info("Seeded candidates", count=len(self.seed_names))
            except IntegrityError:
                # A concurrent first request seeded the ballot already
                await session.rollback()
                logger.info("Candidates already seeded by a concurrent request")

            return await repo.list_all()

    async def _voter_exists(self, voter_identifier: str) -> bool:
        async with self.database.session() as session:
            return await VoteRepository(session).exists_by_voter(voter_identifier)

    async def _summarize(self) -> VoteSummary:
        async with self.database.session() as session:
            return VoteSummary(
                candidates=await CandidateRepository(session).count(),
                total_votes=await VoteRepository(session).count_all(),
            )

    # =========================================================================
    # Writes
    # =========================================================================

    async def cast_vote(self, candidate_id: int, voter_identifier: str) -> list[Candidate]:
        """
        Record one vote and return the refreshed ballot.

        The duplicate check, tally increment and vote insert run in a single
        transaction. The unique constraint on voter_identifier decides any
        race between concurrent votes from the same voter; the loser's
        increment is rolled back with it.

        Raises:
            DuplicateVote: voter_identifier already voted.
            CandidateNotFound: no candidate with candidate_id.
            StoreUnavailable: the vote could not be persisted.
        """
        try:
            candidates = await self._run(self._record_vote, candidate_id, voter_identifier)
        except DuplicateVote:
            logger.info("Duplicate vote rejected", candidate_id=candidate_id)
            raise
        except CandidateNotFound:
            logger.info("Vote for unknown candidate rejected", candidate_id=candidate_id)
            raise
        except StoreUnavailable as e:
            logger.error("Vote not recorded: store unavailable", candidate_id=candidate_id, error=str(e))
            raise

        logger.info("Vote recorded", candidate_id=candidate_id)
        return candidates

    async def _record_vote(self, candidate_id: int, voter_identifier: str) -> list[Candidate]:
        async with self.database.session() as session:
            candidate_repo = CandidateRepository(session)
            vote_repo = VoteRepository(session)

            if await vote_repo.exists_by_voter(voter_identifier):
                raise DuplicateVote(voter_identifier)

            # Ids outside the key range cannot match a row and some drivers reject them
            if not 0 < candidate_id <= CANDIDATE_ID_MAX:
                raise CandidateNotFound(candidate_id)

            if not await candidate_repo.increment_votes(candidate_id):
                await session.rollback()
                raise CandidateNotFound(candidate_id)

            try:
                await vote_repo.create(candidate_id, voter_identifier)
            except IntegrityError:
                await session.rollback()
                if await vote_repo.exists_by_voter(voter_identifier):
                    raise DuplicateVote(voter_identifier) from None
                raise

            candidates = await candidate_repo.list_all()
            await session.commit()
            return candidates

    async def reconcile_tallies(self) -> dict[int, tuple[int, int]]:
        """
        Recompute every tally from the vote rows and fix any that drifted.

        Returns: {candidate_id: (stored, counted)} for each corrected candidate.

        Raises:
            StoreUnavailable: the store could not be read or updated.
        """
        corrections = await self._run(self._reconcile)
        if corrections:
            logger.warning("Corrected drifted tallies", corrections=corrections)
        else:
            logger.info("All tallies consistent")
        return corrections

    async def _reconcile(self) -> dict[int, tuple[int, int]]:
        async with self.database.session() as session:
            repo = CandidateRepository(session)
            counted = await repo.get_recorded_tallies()
            corrections: dict[int, tuple[int, int]] = {}

            for candidate in await repo.list_all():
                actual = counted.get(candidate.id, 0)
                if candidate.votes != actual:
                    corrections[candidate.id] = (candidate.votes, actual)
                    await repo.recount_votes(candidate.id)

            await session.commit()
            return corrections
