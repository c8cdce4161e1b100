# =============================================================================
# core/models/webhook.py - Payment Webhook Schemas
# =============================================================================
# Payload sent by the payment provider when a user's subscription changes.
# Only "user.upgraded" causes a state change; other events are accepted
# and ignored.
# =============================================================================

from pydantic import BaseModel, Field

UPGRADE_EVENT = "user.upgraded"


class WebhookData(BaseModel):
    """Event data; the provider only ever sends the user id."""
    user_id: int


class WebhookEvent(BaseModel):
    """
    Request body for POST /api/polka/webhooks.

    Example:
        {
            "event": "user.upgraded",
            "data": {"user_id": 3}
        }
    """

    event: str = Field(
        ...,
        description="Event name, e.g. 'user.upgraded'"
    )

    data: WebhookData | None = Field(
        default=None,
        description="Event data; required for 'user.upgraded'"
    )
