# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Readiness check
# - chirps.py: Posting, listing and fetching chirps
# - users.py: Signup and credential updates
# - webhooks.py: Payment provider events
# - admin.py: Request metrics and debug reset
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import chirps
from . import users
from . import webhooks
from . import admin

__all__ = [
    "health",
    "chirps",
    "users",
    "webhooks",
    "admin",
]
