"""Pydantic request/response schemas."""

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
from roster.schemas.character import Character, CharacterCreate, CharacterUpdate
from roster.schemas.health import HealthResponse

__all__ = [
    "AccessTokenResponse",
    "Character",
    "CharacterCreate",
    "CharacterUpdate",
    "CredentialsRequest",
    "HealthResponse",
    "MessageResponse",
    "Principal",
    "RefreshRequest",
    "Role",
    "TokenPairResponse",
    "User",
]
