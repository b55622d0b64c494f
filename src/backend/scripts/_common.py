"""
Common utilities for backend scripts.

Import this module at the top of any script so it can be run directly
(python scripts/foo.py) as well as a module (python -m scripts.foo).

Usage:
    import scripts._common  # noqa: F401
    from scripts._common import open_ledger
"""

import sys
from pathlib import Path

# Add backend root to path for imports
BACKEND_ROOT = Path(__file__).parent.parent
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from core.config import settings  # noqa: E402
from db.session import Database  # noqa: E402
from services.vote_ledger import VoteLedger  # noqa: E402


def open_ledger() -> tuple[Database, VoteLedger]:
    """Build a Database handle and ledger from settings. The caller disposes the database."""
    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    ledger = VoteLedger(
        database,
        seed_names=settings.seed_candidates_list,
        timeout_seconds=settings.STORE_TIMEOUT_SECONDS,
    )
    return database, ledger
