"""Health check and API discovery endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from acquisitions.api.deps import get_app_settings
from acquisitions.core.config import Settings
from acquisitions.core.database import check_db_connected, get_db
from acquisitions.schemas.health import ApiInfoResponse, HealthResponse

router = APIRouter()

_STARTED_AT = time.monotonic()


@router.get("/health", response_model=HealthResponse)
def get_health(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Return service health status, uptime and database connectivity.
    Used by load balancers and monitoring; never rate limited.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
        environment=app_settings.APP_ENV,
        database=db_status,
    )


def get_api_info() -> ApiInfoResponse:
    """Root of the API prefix; minimal payload for discovery."""
    return ApiInfoResponse(message="Acquisitions API is up and running!")
