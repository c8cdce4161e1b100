# =============================================================================
# app/routers/admin.py - Admin Endpoints
# =============================================================================
# Request metrics and a development-only database reset.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from app.auth import get_app_state
from app.state import AppState

logger = logging.getLogger(__name__)

router = APIRouter()


class MetricsResponse(BaseModel):
    """Number of API requests served since start (or last reset)."""
    hits: int


class ResetResponse(BaseModel):
    status: str


@router.get("/metrics", response_model=MetricsResponse)
def get_metrics(state: AppState = Depends(get_app_state)) -> MetricsResponse:
    return MetricsResponse(hits=state.metrics.hits)


@router.post("/reset", response_model=ResetResponse)
def reset_database(state: AppState = Depends(get_app_state)) -> ResetResponse:
    """
    Wipe all users and chirps and zero the request counter.

    Only available when DEBUG is on and not in production.
    """
    if not state.settings.reset_allowed:
        logger.warning("Refused database reset outside debug mode")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Reset is only allowed in debug mode",
        )

    state.store.reset()
    state.metrics.reset()
    return ResetResponse(status="reset")
