"""FastAPI application entrypoint. No business logic; only wiring, startup checks and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from roster.api.errors import register_exception_handlers
from roster.api.v1 import router as v1_router
from roster.core.config import Settings, settings
from roster.core.dependencies import get_credential_store
from roster.schemas.auth import CredentialsRequest, Role
from roster.services.credentials import ConflictError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def warn_insecure_settings(app_settings: Settings) -> None:
    """Log a warning when tokens are signed with the built-in default secret."""
    if app_settings.uses_default_jwt_secret:
        logger.warning(
            "JWT_SECRET is not set; tokens are signed with the insecure default secret. "
            "Set JWT_SECRET before running in production."
        )


def bootstrap_admin(app_settings: Settings) -> None:
    """Create the configured admin account if it does not exist yet."""
    email = app_settings.BOOTSTRAP_ADMIN_EMAIL
    password = app_settings.BOOTSTRAP_ADMIN_PASSWORD
    if not email or password is None:
        return
    try:
        creds = CredentialsRequest(email=email.strip(), password=password.get_secret_value())
    except ValidationError as e:
        logger.warning("Bootstrap admin not created: invalid credentials (%s)", e.errors()[0]["msg"])
        return
    try:
        get_credential_store().register(creds.email, creds.password, role=Role.ADMIN)
    except ConflictError:
        logger.info("Bootstrap admin already exists; skipping.")
        return
    logger.info("Bootstrap admin created: %s", creds.email)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    warn_insecure_settings(settings)
    bootstrap_admin(settings)
    yield


app = FastAPI(
    title="Roster API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Roster API"}
