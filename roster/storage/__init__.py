"""Storage backends for users and revoked tokens."""

from roster.storage.base import (
    DuplicateKeyError,
    RevokedTokenRepository,
    UserRecord,
    UserRepository,
)
from roster.storage.memory import InMemoryRevokedTokenRepository, InMemoryUserRepository
from roster.storage.sql import SqlRevokedTokenRepository, SqlUserRepository

__all__ = [
    "DuplicateKeyError",
    "InMemoryRevokedTokenRepository",
    "InMemoryUserRepository",
    "RevokedTokenRepository",
    "SqlRevokedTokenRepository",
    "SqlUserRepository",
    "UserRecord",
    "UserRepository",
]
