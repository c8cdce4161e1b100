# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - chirp.py: Chirp record, create request, sort order
# - user.py: User record, signup/update/login requests and responses
# - document.py: The persisted document (users + chirps)
# - webhook.py: Payment provider webhook payload
#
# These models define the "contract" between API, services and storage.
# =============================================================================

# -----------------------------------------------------------------------------
# Chirp Models
# -----------------------------------------------------------------------------
from .chirp import (
    MAX_CHIRP_LENGTH,
    Chirp,
    ChirpCreate,
    SortOrder,
)

# -----------------------------------------------------------------------------
# User Models
# -----------------------------------------------------------------------------
from .user import (
    LoginRequest,
    LoginResponse,
    User,
    UserCreate,
    UserResponse,
    UserUpdate,
)

# -----------------------------------------------------------------------------
# Storage Models
# -----------------------------------------------------------------------------
from .document import Document

# -----------------------------------------------------------------------------
# Webhook Models
# -----------------------------------------------------------------------------
from .webhook import (
    UPGRADE_EVENT,
    WebhookData,
    WebhookEvent,
)

__all__ = [
    # Chirp
    "MAX_CHIRP_LENGTH",
    "Chirp",
    "ChirpCreate",
    "SortOrder",
    # User
    "LoginRequest",
    "LoginResponse",
    "User",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    # Storage
    "Document",
    # Webhook
    "UPGRADE_EVENT",
    "WebhookData",
    "WebhookEvent",
]
