"""Token service: issue and verify signed, time-bounded JWTs."""

import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import jwt

from roster.schemas.auth import Principal


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class VerificationError(str, Enum):
    """Why a presented token was not accepted."""

    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class VerificationResult:
    """Either the decoded claims or the reason verification failed."""

    claims: dict[str, Any] | None = None
    error: VerificationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TokenService:
    """
    Stateless issue/verify pair over a shared HMAC secret.

    A token is valid for the half-open interval [iat, exp) measured in whole
    seconds of the injected clock. Revocation is not consulted here.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str,
        access_ttl_seconds: int,
        refresh_ttl_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._access_ttl = access_ttl_seconds
        self._refresh_ttl = refresh_ttl_seconds
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    def _encode(self, claims: dict[str, Any], token_type: TokenType, ttl: int) -> str:
        now = self._now()
        payload: dict[str, Any] = {
            **claims,
            "type": token_type.value,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def issue_access_token(self, principal: Principal) -> str:
        """Create an access token carrying id, email and role."""
        claims = {"id": principal.id, "email": principal.email, "role": principal.role.value}
        return self._encode(claims, TokenType.ACCESS, self._access_ttl)

    def issue_refresh_token(self, user_id: int) -> str:
        """Create a refresh token carrying only the user id."""
        return self._encode({"id": user_id}, TokenType.REFRESH, self._refresh_ttl)

    def verify(
        self, token: str, expected_type: TokenType | None = None
    ) -> VerificationResult:
        """Check signature and validity window of token. Never raises."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                # Expiry is checked below against the injected clock.
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "iat"],
                },
            )
        except jwt.InvalidSignatureError:
            return VerificationResult(error=VerificationError.INVALID_SIGNATURE)
        except jwt.PyJWTError:
            return VerificationResult(error=VerificationError.MALFORMED)

        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            return VerificationResult(error=VerificationError.MALFORMED)
        if expected_type is not None and payload.get("type") != expected_type.value:
            return VerificationResult(error=VerificationError.MALFORMED)

        now = self._now()
        if now < issued_at:
            return VerificationResult(error=VerificationError.MALFORMED)
        if now >= expires_at:
            return VerificationResult(error=VerificationError.EXPIRED)
        return VerificationResult(claims=payload)
