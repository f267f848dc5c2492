"""ORM model for user accounts when the SQL storage backend is selected."""

from sqlalchemy import Column, Integer, String, Text

from roster.models.base import Base


class UserRow(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'
    refresh_token: the single live refresh token, NULL after logout
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    refresh_token = Column(Text, nullable=True)
