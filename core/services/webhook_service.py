# =============================================================================
# core/services/webhook_service.py - Payment Webhook Ingestion
# =============================================================================
# Consumes events from the payment provider. Exactly one event type has an
# effect: "user.upgraded" sets the user's Chirpy Red flag. Every other
# event is acknowledged and ignored so the provider stops retrying it.
# =============================================================================

import hmac
import logging

from core.models import UPGRADE_EVENT
from lib.record_store import RecordStore
from lib.utils import AuthError, AuthFailure, ValidationError

logger = logging.getLogger(__name__)


class WebhookService:
    """Applies webhook events after checking the shared secret."""

    def __init__(self, store: RecordStore, api_key: str):
        if not api_key:
            raise ValueError("Webhook API key must not be empty")
        self.store = store
        self._api_key = api_key

    def verify_secret(self, shared_secret: str) -> None:
        """
        Check the key presented by the sender in constant time.

        Raises:
            AuthError(WRONG_SECRET): If the key does not match
        """
        if not hmac.compare_digest(shared_secret.encode("utf-8"), self._api_key.encode("utf-8")):
            logger.warning("Rejected webhook with invalid API key")
            raise AuthError(AuthFailure.WRONG_SECRET, scheme="ApiKey")

    def handle(self, shared_secret: str, event: str, user_id: int | None) -> bool:
        """
        Apply one webhook event.

        Args:
            shared_secret: Key presented by the sender
            event: Event name
            user_id: User the event refers to; only upgrades need one

        Returns:
            True if the event changed (or re-applied) state, False if the
            event type is ignored

        Raises:
            AuthError(WRONG_SECRET): If the key does not match, whatever the event
            ValidationError: If an upgrade event carries no user id
            NotFoundError: If the event is an upgrade for an unknown user
        """
        self.verify_secret(shared_secret)

        if event != UPGRADE_EVENT:
            logger.info(f"Ignoring webhook event {event!r}")
            return False

        if user_id is None:
            raise ValidationError(
                "Upgrade event is missing data.user_id",
                code="WEBHOOK_MISSING_USER_ID",
                suggestion="Send the upgraded user's id as data.user_id",
            )

        self.store.set_chirpy_red(user_id, True)
        logger.info(f"Upgraded user {user_id} to Chirpy Red")
        return True
