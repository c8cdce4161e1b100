# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# Signup is public; updating credentials requires a bearer token and only
# ever touches the token's own user.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import get_app_state, get_current_user_id
from app.state import AppState
from core.models import UserCreate, UserResponse, UserUpdate

router = APIRouter()


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(
    request: UserCreate,
    state: AppState = Depends(get_app_state),
) -> UserResponse:
    """
    Sign up.

    Returns the new user without the password hash. An email that is
    already registered is rejected with 400.
    """
    user = state.users.signup(request.email, request.password)
    return user.to_response()


@router.put("/users", response_model=UserResponse)
def update_user(
    request: UserUpdate,
    user_id: int = Depends(get_current_user_id),
    state: AppState = Depends(get_app_state),
) -> UserResponse:
    """Change the authenticated user's email and/or password."""
    user = state.users.update_user(user_id, email=request.email, password=request.password)
    return user.to_response()
