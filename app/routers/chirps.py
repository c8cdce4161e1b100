# =============================================================================
# app/routers/chirps.py - Chirp Endpoints
# =============================================================================
# Posting requires authentication; reading is public.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import get_app_state, get_current_user_id
from app.state import AppState
from core.models import Chirp, ChirpCreate, SortOrder
from lib.utils import parse_int, parse_positive_id

router = APIRouter()


@router.post("/chirps", response_model=Chirp, status_code=201)
def create_chirp(
    request: ChirpCreate,
    user_id: int = Depends(get_current_user_id),
    state: AppState = Depends(get_app_state),
) -> Chirp:
    """
    Post a chirp as the authenticated user.

    The body must be 1-140 characters. Blocked words are masked
    with "****" before the chirp is stored.
    """
    return state.chirps.submit(user_id, request.body)


@router.get("/chirps", response_model=list[Chirp])
def list_chirps(
    author_id: Annotated[str | None, Query(description="Only chirps by this user id")] = None,
    sort: Annotated[str | None, Query(description="'asc' (default) or 'desc' by chirp id")] = None,
    state: AppState = Depends(get_app_state),
) -> list[Chirp]:
    """
    List chirps.

    Unknown sort values fall back to ascending. A non-numeric author_id
    is rejected with 400.
    """
    author = parse_int(author_id, "author_id") if author_id else None
    order = SortOrder.DESC if sort == SortOrder.DESC.value else SortOrder.ASC
    return state.chirps.list_chirps(author_id=author, sort=order)


@router.get("/chirps/{chirp_id}", response_model=Chirp)
def get_chirp(
    chirp_id: Annotated[str, Path(description="Chirp id")],
    state: AppState = Depends(get_app_state),
) -> Chirp:
    """Get one chirp by id."""
    return state.chirps.get_chirp(parse_positive_id(chirp_id, "chirp_id"))
