"""ORM model for revoked bearer tokens."""

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, func

from roster.models.base import Base


class RevokedTokenRow(Base):
    """
    One row per revoked token, keyed by the SHA-256 of the token string.

    expires_at: the token's own exp claim (epoch seconds), NULL if unknown
    """

    __tablename__ = "revoked_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token_hash = Column(String(64), nullable=False, unique=True, index=True)
    expires_at = Column(BigInteger, nullable=True, index=True)
    revoked_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
