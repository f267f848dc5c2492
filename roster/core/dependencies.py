"""Process-wide service instances, built once from settings and injected with Depends."""

from functools import lru_cache

from sqlalchemy.orm import Session, sessionmaker

from roster.core.config import get_settings
from roster.core.database import create_session_factory
from roster.services.characters import CharacterStore
from roster.services.credentials import CredentialStore
from roster.services.gates import AuthenticationGate
from roster.services.revocation import RevocationRegistry
from roster.services.tokens import TokenService
from roster.storage import (
    InMemoryRevokedTokenRepository,
    InMemoryUserRepository,
    RevokedTokenRepository,
    SqlRevokedTokenRepository,
    SqlUserRepository,
    UserRepository,
)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Session factory for the SQL backend (creates tables on first use)."""
    settings = get_settings()
    return create_session_factory(settings.DATABASE_URL, echo=settings.DEBUG)


@lru_cache
def get_user_repository() -> UserRepository:
    if get_settings().STORAGE_BACKEND == "sql":
        return SqlUserRepository(get_session_factory())
    return InMemoryUserRepository()


@lru_cache
def get_revoked_token_repository() -> RevokedTokenRepository:
    if get_settings().STORAGE_BACKEND == "sql":
        return SqlRevokedTokenRepository(get_session_factory())
    return InMemoryRevokedTokenRepository()


@lru_cache
def get_credential_store() -> CredentialStore:
    return CredentialStore(get_user_repository(), bcrypt_rounds=get_settings().BCRYPT_ROUNDS)


@lru_cache
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        access_ttl_seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS,
        refresh_ttl_seconds=settings.REFRESH_TOKEN_EXPIRE_SECONDS,
    )


@lru_cache
def get_revocation_registry() -> RevocationRegistry:
    return RevocationRegistry(get_revoked_token_repository())


@lru_cache
def get_authentication_gate() -> AuthenticationGate:
    return AuthenticationGate(get_token_service(), get_revocation_registry())


@lru_cache
def get_character_store() -> CharacterStore:
    return CharacterStore()


def reset_dependencies() -> None:
    """Forget every cached instance; the next call builds fresh ones from current settings."""
    for factory in (
        get_session_factory,
        get_user_repository,
        get_revoked_token_repository,
        get_credential_store,
        get_token_service,
        get_revocation_registry,
        get_authentication_gate,
        get_character_store,
    ):
        factory.cache_clear()
