"""Health check endpoint with optional database connectivity check."""

from fastapi import APIRouter

from roster.core.config import settings
from roster.core.database import check_db_connected
from roster.core.dependencies import get_session_factory
from roster.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health() -> HealthResponse:
    """
    Return service health status and, for the SQL backend, database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = None
    if settings.STORAGE_BACKEND == "sql":
        db_status = "connected" if check_db_connected(get_session_factory()) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        storage=settings.STORAGE_BACKEND,
        database=db_status,
    )
