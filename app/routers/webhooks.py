# =============================================================================
# app/routers/webhooks.py - Payment Provider Webhooks
# =============================================================================
# The provider authenticates with 'Authorization: ApiKey <key>'. The key is
# checked in a dependency, before the body is validated, so a wrong key is
# always 401. Successful (and ignored) events get 204 No Content.
# =============================================================================

from fastapi import APIRouter, Depends, Response

from app.auth import get_app_state, verify_webhook_key
from app.state import AppState
from core.models import WebhookEvent

router = APIRouter()


@router.post("/polka/webhooks", status_code=204, response_class=Response)
def receive_webhook(
    event: WebhookEvent,
    api_key: str = Depends(verify_webhook_key),
    state: AppState = Depends(get_app_state),
) -> Response:
    """
    Receive a payment event.

    "user.upgraded" marks the user as Chirpy Red; other events are
    acknowledged without any change.

    Raises:
        401: Missing or wrong API key
        400: Upgrade without data.user_id
        404: Upgrade for a user that does not exist
    """
    user_id = event.data.user_id if event.data else None
    state.webhooks.handle(api_key, event.event, user_id)
    return Response(status_code=204)
