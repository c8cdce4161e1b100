# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# POST /api/login exchanges an email + password for a session token.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_app_state
from app.state import AppState
from core.models import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    state: AppState = Depends(get_app_state),
) -> LoginResponse:
    """
    Log in with email and password.

    Returns the user plus a signed token valid for `expires_in_seconds`
    (at most 24 hours).

    Raises:
        401: If the email is unknown or the password is wrong
    """
    user, token = state.users.login(
        request.email,
        request.password,
        ttl_seconds=request.expires_in_seconds,
    )
    return LoginResponse(**user.to_response().model_dump(), token=token)
