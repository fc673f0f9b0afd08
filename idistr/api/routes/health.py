"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from idistr.application.dto.responses import HealthResponse
from idistr.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service status, configuration summary and uptime."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        backend_configured=bool(settings.backend.base_url),
        state_backend=settings.state.backend,
        uptime_seconds=time.time() - _start_time,
    )
