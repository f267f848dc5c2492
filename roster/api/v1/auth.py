"""Register, login, refresh and logout, plus the auth dependencies (get_current_principal, require_roles)."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from roster.core.config import get_settings
from roster.core.dependencies import (
    get_authentication_gate,
    get_credential_store,
    get_revocation_registry,
    get_token_service,
)
from roster.schemas.auth import (
    AccessTokenResponse,
    CredentialsRequest,
    MessageResponse,
    Principal,
    RefreshRequest,
    Role,
    TokenPairResponse,
    User,
)
from roster.services.credentials import ConflictError, CredentialStore
from roster.services.gates import Authenticated, AuthenticationGate, Rejected, authorize
from roster.services.retention import run_revocation_purge
from roster.services.revocation import RevocationRegistry
from roster.services.tokens import TokenService, TokenType

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _reject(outcome: Rejected) -> HTTPException:
    headers = None
    if outcome.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=outcome.status_code, detail=outcome.detail, headers=headers)


def get_authenticated(
    gate: Annotated[AuthenticationGate, Depends(get_authentication_gate)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Authenticated:
    """Dependency: require a valid, unrevoked Bearer access token. Raises 401 or 403."""
    outcome = gate.authenticate_token(credentials.credentials if credentials else None)
    if isinstance(outcome, Rejected):
        raise _reject(outcome)
    return outcome


def get_current_principal(
    authenticated: Annotated[Authenticated, Depends(get_authenticated)],
) -> Principal:
    """Dependency: the principal of the current request."""
    return authenticated.principal


def require_roles(*roles: Role) -> Callable[..., Principal]:
    """Dependency factory: require an authenticated principal with one of roles. Raises 403 otherwise."""
    check = authorize(roles)

    def dependency(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        outcome = check(principal)
        if isinstance(outcome, Rejected):
            raise _reject(outcome)
        return outcome.principal

    return dependency


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register(
    body: CredentialsRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> User:
    """Create a USER account. The response never includes the password hash."""
    try:
        return store.register(body.email, body.password)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.post("/login", response_model=TokenPairResponse)
def login(
    body: CredentialsRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenPairResponse:
    """
    Authenticate with email and password; returns an access and a refresh token.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    user = store.find_by_email(body.email)
    if user is None or not store.verify_password(user, body.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = tokens.issue_access_token(
        Principal(id=user.id, email=user.email, role=user.role)
    )
    refresh_token = tokens.issue_refresh_token(user.id)
    store.set_refresh_token(user.email, refresh_token)
    logger.info("User logged in: user_id=%s", user.id)
    return TokenPairResponse(access_token=access_token, refresh_token=refresh_token)


@router.post("/refresh", response_model=AccessTokenResponse)
def refresh(
    body: RefreshRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    revocations: Annotated[RevocationRegistry, Depends(get_revocation_registry)],
) -> AccessTokenResponse:
    """Exchange the live refresh token from the last login for a new access token."""
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired refresh token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if revocations.is_revoked(body.refresh_token):
        raise invalid
    result = tokens.verify(body.refresh_token, expected_type=TokenType.REFRESH)
    if not result.ok:
        raise invalid
    user_id = result.claims.get("id")
    if not isinstance(user_id, int) or not store.refresh_token_matches(user_id, body.refresh_token):
        raise invalid
    user = store.find_by_id(user_id)
    if user is None:
        raise invalid
    access_token = tokens.issue_access_token(
        Principal(id=user.id, email=user.email, role=user.role)
    )
    return AccessTokenResponse(access_token=access_token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    authenticated: Annotated[Authenticated, Depends(get_authenticated)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    revocations: Annotated[RevocationRegistry, Depends(get_revocation_registry)],
) -> MessageResponse:
    """Revoke the presented access token and forget the user's refresh token."""
    principal = authenticated.principal
    revocations.revoke(authenticated.token, expires_at=authenticated.expires_at)
    if not store.set_refresh_token(principal.email, None):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    run_revocation_purge(revocations, get_settings())
    logger.info("User logged out: user_id=%s", principal.id)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=Principal)
def me(principal: Annotated[Principal, Depends(get_current_principal)]) -> Principal:
    """Return the principal attached to the current access token."""
    return principal
