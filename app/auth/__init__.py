# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides bearer-token authentication backed by CredentialService.
#
# Usage:
#   from app.auth import get_current_user_id
#
#   @router.post("/protected")
#   def protected(user_id: int = Depends(get_current_user_id)):
#       return {"user_id": user_id}
# =============================================================================

from app.auth.dependencies import get_app_state, get_current_user_id, verify_webhook_key

__all__ = [
    "get_app_state",
    "get_current_user_id",
    "verify_webhook_key",
]
