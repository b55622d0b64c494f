"""
Vote ledger error taxonomy.

Boundary validation errors are handled by FastAPI/pydantic before any of
these can be raised.
"""


class VotingError(Exception):
    """Base exception for vote ledger operations."""

    code = "voting_error"
    message = "The vote could not be recorded. Please try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class StoreUnavailable(VotingError):
    """The persistent store is unreachable, failing or timed out."""

    code = "store_unavailable"
    message = "The voting service is temporarily unavailable. Please try again."


class CandidateNotFound(VotingError):
    """A vote referenced a candidate that does not exist."""

    code = "candidate_not_found"
    message = "Candidate not found"

    def __init__(self, candidate_id: int):
        self.candidate_id = candidate_id
        super().__init__(f"Candidate {candidate_id} not found")


class DuplicateVote(VotingError):
    """The voter identifier already has a recorded vote."""

    code = "already_voted"
    message = "This device has already voted"

    def __init__(self, voter_identifier: str):
        self.voter_identifier = voter_identifier
        super().__init__()
