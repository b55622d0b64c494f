"""
Vote model.

One row per accepted vote. The unique constraint on voter_identifier is what
enforces one vote per voter across all candidates, including under
concurrent submission.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class Vote(Base):
    """
    Immutable vote record.

    voter_identifier is an opaque client-derived string (public IP or a
    browser fingerprint). It is a deduplication key, not an identity.
    """

    __tablename__ = "votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    candidate_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("candidates.id", ondelete="NO ACTION"),
        nullable=False,
        index=True,
    )

    voter_identifier: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Vote(id={self.id}, candidate_id={self.candidate_id})>"
