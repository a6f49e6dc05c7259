"""Health check endpoint. No dependencies; used for liveness checks."""

from fastapi import APIRouter

from newsecho.core.config import get_settings
from newsecho.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok status with the configured backends."""
    settings = get_settings()
    return HealthResponse(
        version=settings.app_version,
        database_backend=settings.database_backend,
        auth_backend=settings.auth_backend,
    )
