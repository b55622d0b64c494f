"""
Candidate model.

Holds the ballot and the denormalized per-candidate tally. The tally is only
ever changed by an atomic in-store increment issued in the same transaction
as the vote insert, or by tally reconciliation.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base

# Largest id the Integer primary key can hold
CANDIDATE_ID_MAX = 2**31 - 1


class Candidate(Base):
    """A named option on the ballot."""

    __tablename__ = "candidates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Unique so two concurrent seeders cannot both insert the ballot
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Aggregated vote count (equals the number of Vote rows referencing this candidate)
    votes: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("votes >= 0", name="ck_candidates_votes_non_negative"),
        CheckConstraint("length(name) > 0", name="ck_candidates_name_not_empty"),
    )

    def __repr__(self) -> str:
        return f"<Candidate(id={self.id}, name={self.name!r}, votes={self.votes})>"
