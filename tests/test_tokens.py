"""Unit tests for roster.services.tokens: issuance, validity window, and classified verification errors."""

import unittest

import jwt

from roster.schemas.auth import Principal, Role
from roster.services.tokens import TokenService, TokenType, VerificationError

SECRET = "unit-test-signing-secret-0123456789abcdef"
ACCESS_TTL = 3600
REFRESH_TTL = 86400
START = 1_700_000_000


class FakeClock:
    """Settable wall clock in epoch seconds."""

    def __init__(self, now: float = START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _service(clock: FakeClock, secret: str = SECRET) -> TokenService:
    return TokenService(
        secret=secret,
        algorithm="HS256",
        access_ttl_seconds=ACCESS_TTL,
        refresh_ttl_seconds=REFRESH_TTL,
        clock=clock,
    )


def _principal(role: Role = Role.USER) -> Principal:
    return Principal(id=7, email="user@example.com", role=role)


class TestIssueAccessToken(unittest.TestCase):
    """Access tokens carry id, email, role and a one-hour window."""

    def test_verifies_immediately_after_issuance(self) -> None:
        clock = FakeClock()
        tokens = _service(clock)
        result = tokens.verify(tokens.issue_access_token(_principal()))
        self.assertTrue(result.ok)
        self.assertEqual(result.claims["id"], 7)
        self.assertEqual(result.claims["email"], "user@example.com")
        self.assertEqual(result.claims["role"], "user")
        self.assertEqual(result.claims["type"], TokenType.ACCESS.value)
        self.assertEqual(result.claims["exp"] - result.claims["iat"], ACCESS_TTL)

    def test_tokens_issued_in_same_second_differ(self) -> None:
        tokens = _service(FakeClock())
        first = tokens.issue_access_token(_principal())
        second = tokens.issue_access_token(_principal())
        self.assertNotEqual(first, second)


class TestValidityWindow(unittest.TestCase):
    """A token is valid for exactly [iat, iat + ttl)."""

    def test_valid_one_second_before_expiry(self) -> None:
        clock = FakeClock()
        tokens = _service(clock)
        token = tokens.issue_access_token(_principal())
        clock.advance(ACCESS_TTL - 1)
        self.assertTrue(tokens.verify(token).ok)

    def test_expired_at_exactly_ttl(self) -> None:
        clock = FakeClock()
        tokens = _service(clock)
        token = tokens.issue_access_token(_principal())
        clock.advance(ACCESS_TTL)
        result = tokens.verify(token)
        self.assertFalse(result.ok)
        self.assertEqual(result.error, VerificationError.EXPIRED)
        self.assertIsNone(result.claims)

    def test_subsecond_progress_does_not_expire_early(self) -> None:
        clock = FakeClock(START + 0.2)
        tokens = _service(clock)
        token = tokens.issue_access_token(_principal())
        clock.advance(ACCESS_TTL - 0.3)
        self.assertTrue(tokens.verify(token).ok)

    def test_refresh_token_outlives_access_token(self) -> None:
        clock = FakeClock()
        tokens = _service(clock)
        access = tokens.issue_access_token(_principal())
        refresh = tokens.issue_refresh_token(7)
        clock.advance(ACCESS_TTL)
        self.assertEqual(tokens.verify(access).error, VerificationError.EXPIRED)
        self.assertTrue(tokens.verify(refresh, expected_type=TokenType.REFRESH).ok)
        clock.advance(REFRESH_TTL)
        self.assertEqual(
            tokens.verify(refresh, expected_type=TokenType.REFRESH).error,
            VerificationError.EXPIRED,
        )

    def test_token_from_the_future_is_malformed(self) -> None:
        clock = FakeClock()
        tokens = _service(clock)
        token = tokens.issue_access_token(_principal())
        clock.advance(-10)
        self.assertEqual(tokens.verify(token).error, VerificationError.MALFORMED)


class TestVerificationErrors(unittest.TestCase):
    """verify() classifies failures and never raises."""

    def test_other_secret_is_invalid_signature(self) -> None:
        clock = FakeClock()
        foreign = _service(clock, secret="another-secret-entirely-0123456789")
        token = foreign.issue_access_token(_principal())
        result = _service(clock).verify(token)
        self.assertEqual(result.error, VerificationError.INVALID_SIGNATURE)

    def test_tampered_payload_is_invalid_signature(self) -> None:
        tokens = _service(FakeClock())
        user_token = tokens.issue_access_token(_principal(Role.USER))
        admin_token = tokens.issue_access_token(_principal(Role.ADMIN))
        header, _, signature = user_token.split(".")
        admin_payload = admin_token.split(".")[1]
        forged = ".".join([header, admin_payload, signature])
        self.assertEqual(tokens.verify(forged).error, VerificationError.INVALID_SIGNATURE)

    def test_garbage_is_malformed(self) -> None:
        tokens = _service(FakeClock())
        for token in ("", "not-a-token", "a.b.c", "...."):
            with self.subTest(token=token):
                self.assertEqual(tokens.verify(token).error, VerificationError.MALFORMED)

    def test_unsigned_token_is_malformed(self) -> None:
        unsigned = jwt.encode(
            {"id": 1, "email": "x@example.com", "role": "admin", "iat": START, "exp": START + 60},
            None,
            algorithm="none",
        )
        self.assertEqual(
            _service(FakeClock()).verify(unsigned).error, VerificationError.MALFORMED
        )

    def test_missing_exp_is_malformed(self) -> None:
        token = jwt.encode({"id": 1, "iat": START}, SECRET, algorithm="HS256")
        self.assertEqual(_service(FakeClock()).verify(token).error, VerificationError.MALFORMED)

    def test_refresh_token_rejected_where_access_expected(self) -> None:
        tokens = _service(FakeClock())
        refresh = tokens.issue_refresh_token(7)
        result = tokens.verify(refresh, expected_type=TokenType.ACCESS)
        self.assertEqual(result.error, VerificationError.MALFORMED)


if __name__ == "__main__":
    unittest.main()
