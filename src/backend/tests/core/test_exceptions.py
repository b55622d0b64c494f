"""
Tests for the vote ledger error taxonomy.
"""

import pytest

from core.exceptions import CandidateNotFound, DuplicateVote, StoreUnavailable, VotingError


@pytest.mark.unit
class TestVotingErrors:
    def test_all_errors_share_base(self) -> None:
        for exc in (StoreUnavailable(), CandidateNotFound(3), DuplicateVote("fp-1")):
            assert isinstance(exc, VotingError)

    def test_codes_are_distinct(self) -> None:
        codes = {StoreUnavailable.code, CandidateNotFound.code, DuplicateVote.code}

        assert len(codes) == 3
        assert DuplicateVote.code == "already_voted"

    def test_candidate_not_found_carries_id(self) -> None:
        exc = CandidateNotFound(42)

        assert exc.candidate_id == 42
        assert "42" in str(exc)

    def test_duplicate_vote_message_hides_identifier(self) -> None:
        exc = DuplicateVote("203.0.113.7")

        assert exc.voter_identifier == "203.0.113.7"
        assert "203.0.113.7" not in str(exc)
