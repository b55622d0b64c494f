"""
Tests for the seed and reconcile maintenance scripts.
"""

import pytest


@pytest.fixture
def configured_settings(monkeypatch, tmp_path, seed_names):
    """Point settings at a fresh SQLite file."""
    from core.config import settings

    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'scripts.db'}")
    monkeypatch.setattr(settings, "SEED_CANDIDATES", ",".join(seed_names))
    return settings


@pytest.mark.integration
class TestSeedCandidatesScript:
    async def test_seeds_empty_database(self, configured_settings, capsys) -> None:
        from scripts.seed_candidates import seed_candidates

        assert await seed_candidates() == 0

        output = capsys.readouterr().out
        assert "Ballot has 5 candidates" in output

    async def test_rerun_does_not_duplicate(self, configured_settings, capsys) -> None:
        from scripts.seed_candidates import seed_candidates

        await seed_candidates()
        await seed_candidates()

        output = capsys.readouterr().out
        assert output.count("Ballot has 5 candidates") == 2

    async def test_without_database_url(self, monkeypatch, capsys) -> None:
        from core.config import settings
        from scripts.seed_candidates import seed_candidates

        monkeypatch.setattr(settings, "DATABASE_URL", "")

        assert await seed_candidates() == 1
        assert "DATABASE_URL is not set" in capsys.readouterr().out

    async def test_unreachable_database_exit_code(self, monkeypatch, tmp_path, capsys) -> None:
        """A database file that cannot be created ends with exit code 1, not a traceback."""
        from core.config import settings
        from scripts.seed_candidates import seed_candidates

        monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'ledger.db'}")

        assert await seed_candidates() == 1
        assert "Store unavailable" in capsys.readouterr().out


@pytest.mark.integration
class TestReconcileTalliesScript:
    async def test_reports_consistent_tallies(self, configured_settings, capsys) -> None:
        from scripts.reconcile_tallies import reconcile_tallies
        from scripts.seed_candidates import seed_candidates

        await seed_candidates()

        assert await reconcile_tallies() == 0
        assert "All tallies match" in capsys.readouterr().out

    async def test_store_unavailable_exit_code(self, monkeypatch, capsys) -> None:
        from core.config import settings
        from scripts.reconcile_tallies import reconcile_tallies

        monkeypatch.setattr(settings, "DATABASE_URL", "")

        assert await reconcile_tallies() == 1
        assert "Store unavailable" in capsys.readouterr().out
