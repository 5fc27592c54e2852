"""Health check endpoints for monitoring application status."""

from fastapi import APIRouter, Depends, status

from shortlink.api.dependencies import get_repository, get_settings
from shortlink.api.schemas import HealthResponse
from shortlink.core.config import Settings
from shortlink.db.base import DatabaseHealthCheck
from shortlink.repositories.base import ShortUrlRepository
from shortlink.repositories.locking import SerializedRepository
from shortlink.repositories.sql import SqlShortUrlRepository

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of the storage backend"
)
async def health_check(
    repository: ShortUrlRepository = Depends(get_repository),
    config: Settings = Depends(get_settings),
):
    """Check health of the storage backend."""
    health_status = {
        "status": "healthy",
        "version": config.APP_VERSION,
        "environment": config.ENVIRONMENT.value,
        "backend": repository.backend_name,
    }

    inner = repository.inner if isinstance(repository, SerializedRepository) else repository
    if isinstance(inner, SqlShortUrlRepository):
        database = await DatabaseHealthCheck.check_connection(inner.engine)
        health_status["database"] = database
        if database["status"] != "healthy":
            health_status["status"] = "degraded"

    return health_status


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
