"""
Seed script to create the ballot.

Creates the tables if needed and inserts the configured candidates when the
ballot is empty. Safe to run repeatedly; it never duplicates candidates.

Run with: python -m scripts.seed_candidates
"""

import asyncio
import sys

from scripts._common import open_ledger  # isort: skip

from core.exceptions import StoreUnavailable


async def seed_candidates() -> int:
    """Create the schema and seed the ballot. Returns a process exit code."""
    database, ledger = open_ledger()
    try:
        if not database.is_configured:
            print("DATABASE_URL is not set. Nothing to seed.")
            return 1

        try:
            await database.create_schema()
        except StoreUnavailable as e:
            print(f"Store unavailable: {e}")
            return 1

        candidates = await ledger.list_candidates()
        if not candidates:
            print("Ballot is empty and could not be seeded; check the database connection.")
            return 1

        for candidate in candidates:
            print(f"  [{candidate.id}] {candidate.name}: {candidate.votes} votes")
        print(f"\n✅ Ballot has {len(candidates)} candidates")
        return 0
    finally:
        await database.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(seed_candidates()))
