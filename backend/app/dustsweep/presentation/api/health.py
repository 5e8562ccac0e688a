"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.dustsweep.domain.chains import DEFAULT_CHAINS

router = APIRouter()

VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    version: str


class ReadinessResponse(BaseModel):
    """Readiness response model."""

    status: str
    chains: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check application health status.

    Returns:
        Health status with timestamp and version.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=VERSION,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """Report readiness along with the number of configured EVM chains.

    The scanner holds no connections between requests, so it is ready as
    soon as the chain registry has loaded.
    """
    return ReadinessResponse(status="ready", chains=len(DEFAULT_CHAINS))
