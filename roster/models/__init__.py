"""SQLAlchemy ORM models."""

from roster.models.base import Base
from roster.models.revoked_token import RevokedTokenRow
from roster.models.user import UserRow

__all__ = ["Base", "RevokedTokenRow", "UserRow"]
