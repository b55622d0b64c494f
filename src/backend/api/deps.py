"""
Shared dependencies for API endpoints.

The vote ledger is built per request around the application's single
Database handle.
"""

from typing import Annotated

from fastapi import Depends, Request

from core.config import settings
from db.session import Database, get_database
from services.vote_ledger import VoteLedger


def get_database_handle(request: Request) -> Database:
    """Get the Database attached at startup, attaching one on first use if startup did not run."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        database = get_database()
        request.app.state.database = database
    return database


def get_vote_ledger(
    database: Annotated[Database, Depends(get_database_handle)],
) -> VoteLedger:
    """Build the vote ledger for this request."""
    return VoteLedger(
        database,
        seed_names=settings.seed_candidates_list,
        timeout_seconds=settings.STORE_TIMEOUT_SECONDS,
    )
