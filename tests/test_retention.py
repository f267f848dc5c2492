"""Unit tests for the revocation purge job (roster.services.retention) and its CLI (roster.retention)."""

import unittest
from unittest.mock import MagicMock, patch

from roster import retention as retention_cli
from roster.services.retention import run_revocation_purge


class TestPurgeDisabled(unittest.TestCase):
    """When REVOCATION_PURGE_ENABLED is False, run_revocation_purge does nothing."""

    def test_returns_zero_and_does_not_purge(self) -> None:
        settings = MagicMock()
        settings.REVOCATION_PURGE_ENABLED = False
        registry = MagicMock()
        self.assertEqual(run_revocation_purge(registry, settings), 0)
        registry.purge_expired.assert_not_called()


class TestPurgeEnabled(unittest.TestCase):
    """When enabled, run_revocation_purge delegates to the registry and returns its count."""

    def test_returns_purged_count(self) -> None:
        settings = MagicMock()
        settings.REVOCATION_PURGE_ENABLED = True
        registry = MagicMock()
        registry.purge_expired.return_value = 3
        self.assertEqual(run_revocation_purge(registry, settings), 3)
        registry.purge_expired.assert_called_once_with()


class TestRetentionCli(unittest.TestCase):
    """python -m roster.retention: refuses the memory backend, purges the SQL store."""

    def _settings(self, backend: str) -> MagicMock:
        settings = MagicMock()
        settings.STORAGE_BACKEND = backend
        settings.REVOCATION_PURGE_ENABLED = True
        return settings

    def test_refuses_memory_backend(self) -> None:
        registry = MagicMock()
        with patch.object(retention_cli, "get_settings", return_value=self._settings("memory")), patch.object(
            retention_cli, "get_revocation_registry", return_value=registry
        ):
            with self.assertLogs("roster.retention", level="ERROR"):
                code = retention_cli.main()
        self.assertEqual(code, 1)
        registry.purge_expired.assert_not_called()

    def test_purges_sql_backend(self) -> None:
        registry = MagicMock()
        registry.purge_expired.return_value = 2
        with patch.object(retention_cli, "get_settings", return_value=self._settings("sql")), patch.object(
            retention_cli, "get_revocation_registry", return_value=registry
        ):
            with self.assertLogs("roster.retention", level="INFO") as captured:
                code = retention_cli.main()
        self.assertEqual(code, 0)
        registry.purge_expired.assert_called_once_with()
        self.assertIn("entries_removed=2", captured.output[-1])

    def test_failure_returns_nonzero(self) -> None:
        registry = MagicMock()
        registry.purge_expired.side_effect = RuntimeError("database is locked")
        with patch.object(retention_cli, "get_settings", return_value=self._settings("sql")), patch.object(
            retention_cli, "get_revocation_registry", return_value=registry
        ):
            with self.assertLogs("roster.retention", level="ERROR"):
                code = retention_cli.main()
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
