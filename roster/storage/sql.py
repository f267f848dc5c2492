"""SQLAlchemy storage backend."""

import hashlib

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from roster.models import RevokedTokenRow, UserRow
from roster.schemas.auth import Role
from roster.storage.base import DuplicateKeyError, UserRecord


def token_fingerprint(token: str) -> str:
    """SHA-256 hex digest used as the revoked-token key."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _to_record(row: UserRow) -> UserRecord:
    return UserRecord(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        role=Role(row.role),
        refresh_token=row.refresh_token,
    )


class SqlUserRepository:
    """Users in the `users` table. Uniqueness is enforced by the email index."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, email: str) -> UserRecord | None:
        with self._session_factory() as db:
            row = db.query(UserRow).filter(UserRow.email == email).first()
            return _to_record(row) if row is not None else None

    def get_by_id(self, user_id: int) -> UserRecord | None:
        with self._session_factory() as db:
            row = db.query(UserRow).filter(UserRow.id == user_id).first()
            return _to_record(row) if row is not None else None

    def insert(self, email: str, password_hash: str, role: Role) -> UserRecord:
        with self._session_factory() as db:
            row = UserRow(email=email, password_hash=password_hash, role=role.value)
            db.add(row)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise DuplicateKeyError(email) from None
            db.refresh(row)
            return _to_record(row)

    def set_refresh_token(self, email: str, token: str | None) -> bool:
        with self._session_factory() as db:
            updated = (
                db.query(UserRow)
                .filter(UserRow.email == email)
                .update({UserRow.refresh_token: token}, synchronize_session=False)
            )
            db.commit()
            return updated > 0


class SqlRevokedTokenRepository:
    """Revoked tokens in the `revoked_tokens` table, stored by fingerprint."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def add(self, token: str, expires_at: int | None) -> None:
        fingerprint = token_fingerprint(token)
        with self._session_factory() as db:
            row = db.query(RevokedTokenRow).filter(RevokedTokenRow.token_hash == fingerprint).first()
            if row is not None:
                if row.expires_at is not None:
                    row.expires_at = None if expires_at is None else max(row.expires_at, expires_at)
                    db.commit()
                return
            db.add(RevokedTokenRow(token_hash=fingerprint, expires_at=expires_at))
            try:
                db.commit()
            except IntegrityError:
                # Revoked concurrently by another request.
                db.rollback()

    def contains(self, token: str) -> bool:
        fingerprint = token_fingerprint(token)
        with self._session_factory() as db:
            row = (
                db.query(RevokedTokenRow.id)
                .filter(RevokedTokenRow.token_hash == fingerprint)
                .first()
            )
            return row is not None

    def delete_expired(self, now: int) -> int:
        with self._session_factory() as db:
            deleted = (
                db.query(RevokedTokenRow)
                .filter(
                    RevokedTokenRow.expires_at.isnot(None),
                    RevokedTokenRow.expires_at <= now,
                )
                .delete(synchronize_session=False)
            )
            db.commit()
            return deleted
