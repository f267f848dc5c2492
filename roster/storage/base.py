"""Storage interfaces shared by the in-memory and SQL backends."""

from dataclasses import dataclass
from typing import Protocol

from roster.schemas.auth import Role


class DuplicateKeyError(Exception):
    """Raised when inserting a record whose unique key is already stored."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Duplicate key: {key}")


@dataclass(frozen=True)
class UserRecord:
    """Stored user, including the fields that must not leave the credential store."""

    id: int
    email: str
    password_hash: str
    role: Role
    refresh_token: str | None = None


class UserRepository(Protocol):
    """Users keyed by email. Every method is atomic for the record it touches."""

    def get(self, email: str) -> UserRecord | None: ...

    def get_by_id(self, user_id: int) -> UserRecord | None: ...

    def insert(self, email: str, password_hash: str, role: Role) -> UserRecord:
        """Store a new user with a fresh id. Raises DuplicateKeyError if the email exists."""
        ...

    def set_refresh_token(self, email: str, token: str | None) -> bool:
        """Replace the stored refresh token; False if the email is unknown."""
        ...


class RevokedTokenRepository(Protocol):
    """Set of revoked token strings with the expiry each token carried."""

    def add(self, token: str, expires_at: int | None) -> None:
        """Record token as revoked. Re-adding keeps the later expiry; None (keep forever) wins."""
        ...

    def contains(self, token: str) -> bool: ...

    def delete_expired(self, now: int) -> int:
        """Drop entries with expires_at <= now and return how many were dropped."""
        ...
