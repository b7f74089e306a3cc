"""Diagnostic endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.views import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report liveness with the current UTC time."""

    return HealthResponse(
        status="ok",
        message="Audio2Face service running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
