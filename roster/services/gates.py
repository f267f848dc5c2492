"""Authentication and authorization gates for protected requests."""

import logging
from collections.abc import Callable, Collection
from dataclasses import dataclass

from fastapi import status
from pydantic import ValidationError

from roster.schemas.auth import Principal, Role
from roster.services.revocation import RevocationRegistry
from roster.services.tokens import TokenService, TokenType

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class Rejected:
    """Request must stop here with this status and detail."""

    status_code: int
    detail: str


@dataclass(frozen=True)
class Authenticated:
    """Request carries a valid, unrevoked access token."""

    principal: Principal
    token: str
    expires_at: int


@dataclass(frozen=True)
class Allowed:
    """Principal holds one of the required roles."""

    principal: Principal


UNAUTHORIZED = Rejected(status.HTTP_401_UNAUTHORIZED, "Unauthorized")
FORBIDDEN = Rejected(status.HTTP_403_FORBIDDEN, "Forbidden")
INSUFFICIENT_PERMISSIONS = Rejected(status.HTTP_403_FORBIDDEN, "Insufficient permissions")


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from 'Bearer <token>', or None if the header is absent or malformed."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None
    return parts[1]


class AuthenticationGate:
    """
    Turn an Authorization header (or its bearer credential) into an Authenticated principal or a Rejected outcome.

    Order: missing/malformed header (401), revoked token (403), failed
    verification (403). Revocation is checked first so a logged-out token is
    refused regardless of its remaining lifetime.
    """

    def __init__(self, tokens: TokenService, revocations: RevocationRegistry) -> None:
        self._tokens = tokens
        self._revocations = revocations

    def authenticate(self, authorization: str | None) -> Authenticated | Rejected:
        """Authenticate a raw Authorization header value."""
        return self.authenticate_token(extract_bearer_token(authorization))

    def authenticate_token(self, token: str | None) -> Authenticated | Rejected:
        """Authenticate a bearer credential already split from its scheme."""
        token = token.strip() if token else None
        if not token or len(token.split()) != 1:
            return UNAUTHORIZED

        if self._revocations.is_revoked(token):
            logger.info("Rejected revoked token")
            return FORBIDDEN

        result = self._tokens.verify(token, expected_type=TokenType.ACCESS)
        if not result.ok:
            logger.info("Rejected token: %s", result.error.value)
            return FORBIDDEN

        try:
            principal = Principal.model_validate(result.claims)
        except ValidationError:
            logger.info("Rejected token: claims are not a principal")
            return FORBIDDEN
        return Authenticated(principal=principal, token=token, expires_at=result.claims["exp"])


def authorize(required_roles: Collection[Role]) -> Callable[[Principal], Allowed | Rejected]:
    """Build a check that allows a principal iff its role is in required_roles."""
    allowed_roles = frozenset(required_roles)

    def check(principal: Principal) -> Allowed | Rejected:
        if principal.role not in allowed_roles:
            logger.info(
                "Insufficient permissions: user_id=%s role=%s", principal.id, principal.role.value
            )
            return INSUFFICIENT_PERMISSIONS
        return Allowed(principal=principal)

    return check
