"""
Recompute every candidate's tally from the recorded votes.

Tallies are kept in step with the votes table inside each vote transaction,
so this normally reports nothing. It repairs counters edited by hand or
restored from an inconsistent backup.

Run with: python -m scripts.reconcile_tallies
"""

import asyncio
import sys

from scripts._common import open_ledger  # isort: skip

from core.exceptions import StoreUnavailable


async def reconcile_tallies() -> int:
    """Reconcile tallies. Returns a process exit code."""
    database, ledger = open_ledger()
    try:
        corrections = await ledger.reconcile_tallies()
    except StoreUnavailable as e:
        print(f"Store unavailable: {e}")
        return 1
    finally:
        await database.dispose()

    if not corrections:
        print("All tallies match the recorded votes.")
        return 0

    for candidate_id, (stored, counted) in sorted(corrections.items()):
        print(f"  candidate {candidate_id}: {stored} -> {counted}")
    print(f"\n✅ Corrected {len(corrections)} tallies")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(reconcile_tallies()))
