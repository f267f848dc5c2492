"""In-memory storage backend. State lives for the lifetime of the process."""

import threading
from dataclasses import replace

from roster.schemas.auth import Role
from roster.storage.base import DuplicateKeyError, UserRecord


class InMemoryUserRepository:
    """Users in a dict keyed by email, guarded by a single lock."""

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}
        self._emails_by_id: dict[int, str] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get(self, email: str) -> UserRecord | None:
        with self._lock:
            return self._users.get(email)

    def get_by_id(self, user_id: int) -> UserRecord | None:
        with self._lock:
            email = self._emails_by_id.get(user_id)
            return self._users.get(email) if email is not None else None

    def insert(self, email: str, password_hash: str, role: Role) -> UserRecord:
        with self._lock:
            if email in self._users:
                raise DuplicateKeyError(email)
            record = UserRecord(
                id=self._next_id,
                email=email,
                password_hash=password_hash,
                role=role,
            )
            self._next_id += 1
            self._users[email] = record
            self._emails_by_id[record.id] = email
            return record

    def set_refresh_token(self, email: str, token: str | None) -> bool:
        with self._lock:
            record = self._users.get(email)
            if record is None:
                return False
            self._users[email] = replace(record, refresh_token=token)
            return True


class InMemoryRevokedTokenRepository:
    """Revoked tokens in a dict of token -> expiry, guarded by a single lock."""

    def __init__(self) -> None:
        self._tokens: dict[str, int | None] = {}
        self._lock = threading.Lock()

    def add(self, token: str, expires_at: int | None) -> None:
        with self._lock:
            if token in self._tokens:
                current = self._tokens[token]
                # None means "keep forever" and always wins.
                if current is None or expires_at is None:
                    self._tokens[token] = None
                else:
                    self._tokens[token] = max(current, expires_at)
                return
            self._tokens[token] = expires_at

    def contains(self, token: str) -> bool:
        with self._lock:
            return token in self._tokens

    def delete_expired(self, now: int) -> int:
        with self._lock:
            expired = [
                token
                for token, expires_at in self._tokens.items()
                if expires_at is not None and expires_at <= now
            ]
            for token in expired:
                del self._tokens[token]
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
