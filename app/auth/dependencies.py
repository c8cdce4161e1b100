# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for the shared application state and for
# the authorization gate.
#
# Every route that changes user-owned data depends on get_current_user_id;
# there is no other place where bearer tokens are checked.
#
# Usage:
#   from app.auth import get_current_user_id
#
#   @router.post("/protected")
#   def protected(user_id: int = Depends(get_current_user_id)):
#       return {"user_id": user_id}
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends, Header, Request

from app.state import AppState
from core.services import extract_api_key

logger = logging.getLogger(__name__)


def get_app_state(request: Request) -> AppState:
    """Return the AppState attached by create_app()."""
    return request.app.state.chirpy


def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
    state: AppState = Depends(get_app_state),
) -> int:
    """
    Authenticate the request from its 'Authorization: Bearer <token>' header.

    Returns:
        int: The id of the user the token was issued for

    Raises:
        AuthError: Missing/wrongly prefixed header, or an invalid,
            expired or malformed token (rendered as 401)
    """
    user_id = state.credentials.authorize(authorization)
    logger.debug(f"Authenticated user: {user_id}")
    return user_id


def verify_webhook_key(
    authorization: Annotated[str | None, Header()] = None,
    state: AppState = Depends(get_app_state),
) -> str:
    """
    Check the payment provider's 'Authorization: ApiKey <key>' header.

    Runs as a dependency so the key is checked before the request body
    is validated.

    Returns:
        str: The verified API key

    Raises:
        AuthError: Missing header or wrong key (rendered as 401)
    """
    api_key = extract_api_key(authorization)
    state.webhooks.verify_secret(api_key)
    return api_key
