# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import CredentialService, MAX_TOKEN_TTL_SECONDS, extract_api_key
from .chirp_service import ChirpService
from .user_service import UserService
from .webhook_service import WebhookService

__all__ = [
    "CredentialService",
    "MAX_TOKEN_TTL_SECONDS",
    "extract_api_key",
    "ChirpService",
    "UserService",
    "WebhookService",
]
