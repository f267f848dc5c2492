"""Request/response schemas for auth endpoints and the authenticated principal."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from roster.core.security import (
    BCRYPT_MAX_BYTES,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    password_fits_bcrypt,
)


class Role(str, Enum):
    """Roles understood by the authorization gate."""

    ADMIN = "admin"
    USER = "user"


class CredentialsRequest(BaseModel):
    """Email and password, used for both registration and login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        if not password_fits_bcrypt(v):
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
        return v


class RefreshRequest(BaseModel):
    """Refresh token to exchange for a new access token."""

    refresh_token: str = Field(..., min_length=1, description="Refresh token from login")


class TokenPairResponse(BaseModel):
    """Access and refresh tokens returned after a successful login."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")


class AccessTokenResponse(BaseModel):
    """New access token returned by the refresh exchange."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class User(BaseModel):
    """Public view of a stored user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: Role


class Principal(BaseModel):
    """Identity taken from a verified access token, attached to one request."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    role: Role


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
