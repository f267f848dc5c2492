"""Unit tests for roster.main.bootstrap_admin: the configured admin must be able to log in."""

import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from pydantic import SecretStr

from roster import main
from roster.core.config import settings
from roster.core.dependencies import get_credential_store, reset_dependencies
from roster.schemas.auth import Role
from roster.services.credentials import CredentialStore
from roster.storage.memory import InMemoryUserRepository

PREFIX = settings.API_V1_PREFIX


def _bootstrap_settings(email: str | None, password: str | None) -> MagicMock:
    s = MagicMock()
    s.BOOTSTRAP_ADMIN_EMAIL = email
    s.BOOTSTRAP_ADMIN_PASSWORD = SecretStr(password) if password is not None else None
    return s


class TestBootstrapAdmin(unittest.TestCase):
    """bootstrap_admin validates the configured credentials the same way the login route does."""

    def setUp(self) -> None:
        reset_dependencies()
        self.repository = InMemoryUserRepository()
        self.store = CredentialStore(self.repository, bcrypt_rounds=4)
        patcher = patch.object(main, "get_credential_store", return_value=self.store)
        patcher.start()
        self.addCleanup(patcher.stop)
        main.app.dependency_overrides[get_credential_store] = lambda: self.store
        self.client = TestClient(main.app)

    def tearDown(self) -> None:
        main.app.dependency_overrides.clear()
        reset_dependencies()

    def test_mixed_case_email_can_log_in(self) -> None:
        main.bootstrap_admin(_bootstrap_settings("Admin@Example.COM", "secret1"))
        response = self.client.post(
            f"{PREFIX}/auth/login",
            json={"email": "Admin@Example.COM", "password": "secret1"},
        )
        self.assertEqual(response.status_code, 200)
        me = self.client.get(
            f"{PREFIX}/auth/me",
            headers={"Authorization": f"Bearer {response.json()['access_token']}"},
        )
        self.assertEqual(me.json()["role"], Role.ADMIN.value)

    def test_surrounding_whitespace_is_stripped(self) -> None:
        main.bootstrap_admin(_bootstrap_settings("  admin@example.com ", "secret1"))
        self.assertIsNotNone(self.store.find_by_email("admin@example.com"))

    def test_invalid_credentials_are_skipped(self) -> None:
        cases = (
            ("not-an-email", "secret1"),
            ("admin@example.com", "short"),
            ("admin@example.com", "A" * 73),
        )
        for email, password in cases:
            with self.subTest(email=email, password=password):
                with self.assertLogs("roster.main", level="WARNING"):
                    main.bootstrap_admin(_bootstrap_settings(email, password))
                self.assertIsNone(self.repository.get(email))

    def test_unset_settings_do_nothing(self) -> None:
        main.bootstrap_admin(_bootstrap_settings(None, "secret1"))
        main.bootstrap_admin(_bootstrap_settings("admin@example.com", None))
        self.assertIsNone(self.repository.get("admin@example.com"))

    def test_existing_admin_is_left_alone(self) -> None:
        main.bootstrap_admin(_bootstrap_settings("admin@example.com", "secret1"))
        main.bootstrap_admin(_bootstrap_settings("admin@example.com", "another1"))
        user = self.store.find_by_email("admin@example.com")
        self.assertTrue(self.store.verify_password(user, "secret1"))


if __name__ == "__main__":
    unittest.main()
