"""Router – health check and service description."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from src.filemeta.config import Settings
from src.filemeta.schemas.info import HealthResponse, InfoResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Liveness / readiness probe."""
    settings: Settings = request.app.state.settings
    return HealthResponse(service=settings.service_name, timestamp=datetime.now(timezone.utc))


@router.get("/info", response_model=InfoResponse)
@router.get("/test", response_model=InfoResponse)
def service_info(request: Request) -> InfoResponse:
    """Describe the service, its endpoints and the expected form field."""
    settings: Settings = request.app.state.settings
    return InfoResponse(
        service=settings.service_name,
        version=settings.version,
        endpoints={
            "upload": "POST /api/fileanalyse",
            "health": "GET /api/health",
            "info": "GET /api/info",
        },
        note=f'Upload a file using form with input field name="{settings.upload_field}"',
    )
