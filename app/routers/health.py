# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.auth import get_app_state
from app.state import AppState
from lib.utils import ChirpyError

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    environment: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/healthz", response_model=ReadinessResponse)
def readiness_check(state: AppState = Depends(get_app_state)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the database document can be read and decoded.
    """
    try:
        document = state.store.load_document()
        database = f"healthy ({len(document.users)} users, {len(document.chirps)} chirps)"
    except ChirpyError as e:
        database = f"unhealthy: {e.message[:50]}"

    return ReadinessResponse(
        status="ready" if database.startswith("healthy") else "degraded",
        checks=ChecksResponse(database=database),
        environment=state.settings.ENVIRONMENT,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
