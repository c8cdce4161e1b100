# =============================================================================
# app/state.py - Application State
# =============================================================================
# Everything with process lifetime lives on one AppState object that is
# attached to `app.state.chirpy` by create_app(). Route dependencies read it
# from the request, so there are no module-level singletons to reset
# between tests.
# =============================================================================

import threading
from dataclasses import dataclass, field

from app.config import Settings
from core.services import ChirpService, CredentialService, UserService, WebhookService
from lib.record_store import RecordStore


class RequestMetrics:
    """Thread-safe count of API requests served."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits


@dataclass
class AppState:
    """Store, services and counters shared by all request handlers."""

    settings: Settings
    store: RecordStore
    credentials: CredentialService
    chirps: ChirpService
    users: UserService
    webhooks: WebhookService
    metrics: RequestMetrics = field(default_factory=RequestMetrics)


def build_state(settings: Settings) -> AppState:
    """
    Wire the store and services from settings.

    Does not touch the disk; the document is bootstrapped in the app
    lifespan.
    """
    store = RecordStore(settings.DATABASE_PATH)
    credentials = CredentialService(
        secret=settings.JWT_SECRET,
        issuer=settings.TOKEN_ISSUER,
        rounds=settings.BCRYPT_ROUNDS,
    )
    return AppState(
        settings=settings,
        store=store,
        credentials=credentials,
        chirps=ChirpService(store),
        users=UserService(store, credentials),
        webhooks=WebhookService(store, settings.WEBHOOK_API_KEY),
    )
