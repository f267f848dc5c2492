"""Credential store: user registration, lookup, and password verification."""

import hmac
import logging

from roster.core.security import hash_password, verify_password
from roster.schemas.auth import Role, User
from roster.storage.base import DuplicateKeyError, UserRecord, UserRepository

logger = logging.getLogger(__name__)


class ConflictError(Exception):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("A user with this email already exists.")


def _public(record: UserRecord) -> User:
    return User(id=record.id, email=record.email, role=record.role)


class CredentialStore:
    """
    Owns user records and their password hashes.

    Every value returned to callers is a public User; the hash and the stored
    refresh token are only read inside this class.
    """

    def __init__(self, repository: UserRepository, bcrypt_rounds: int) -> None:
        self._repository = repository
        self._bcrypt_rounds = bcrypt_rounds

    def register(self, email: str, password: str, role: Role = Role.USER) -> User:
        """Create a user with a bcrypt hash of password. Raises ConflictError on a taken email."""
        # insert() is the authoritative uniqueness check; this one skips the hash.
        if self._repository.get(email) is not None:
            raise ConflictError(email)
        password_hash = hash_password(password, self._bcrypt_rounds)
        try:
            record = self._repository.insert(email, password_hash, role)
        except DuplicateKeyError as e:
            raise ConflictError(email) from e
        logger.info("User registered: user_id=%s role=%s", record.id, record.role.value)
        return _public(record)

    def find_by_email(self, email: str) -> User | None:
        record = self._repository.get(email)
        return _public(record) if record is not None else None

    def find_by_id(self, user_id: int) -> User | None:
        record = self._repository.get_by_id(user_id)
        return _public(record) if record is not None else None

    def verify_password(self, user: User, password: str) -> bool:
        """Check password against the stored hash of user. Unknown users never verify."""
        record = self._repository.get(user.email)
        if record is None or record.id != user.id:
            return False
        return verify_password(password, record.password_hash)

    def set_refresh_token(self, email: str, token: str | None) -> bool:
        """Replace (or clear, with None) the user's refresh token. False if email is unknown."""
        return self._repository.set_refresh_token(email, token)

    def refresh_token_matches(self, user_id: int, token: str) -> bool:
        """True if token is the live refresh token stored for user_id."""
        record = self._repository.get_by_id(user_id)
        if record is None or record.refresh_token is None:
            return False
        return hmac.compare_digest(record.refresh_token.encode("utf-8"), token.encode("utf-8"))
