# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Signup, login and credential updates. Composes the record store (users)
# with the credential service (hashing, tokens).
#
# Email uniqueness is checked here, outside the store's critical section.
# Two signups racing on the same email can both succeed.
# =============================================================================

import logging

from core.models import User
from core.services.auth_service import CredentialService
from lib.record_store import RecordStore
from lib.utils import AuthError, AuthFailure, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user account operations.

    Example:
        users = UserService(store, credentials)
        users.signup("a@x.com", "secret")
        user, token = users.login("a@x.com", "secret")
    """

    def __init__(self, store: RecordStore, credentials: CredentialService):
        self.store = store
        self.credentials = credentials

    def signup(self, email: str, password: str) -> User:
        """
        Create a user with a hashed password.

        Raises:
            ValidationError: If the email is already registered or the
                password is too long to hash
        """
        self._ensure_email_available(email)
        password_hash = self.credentials.hash_password(password)
        return self.store.create_user(email, password_hash)

    def login(
        self,
        email: str,
        password: str,
        ttl_seconds: int | None = None,
    ) -> tuple[User, str]:
        """
        Check credentials and issue a session token.

        Returns:
            (user, token)

        Raises:
            AuthError(BAD_CREDENTIALS): Unknown email or wrong password
                (indistinguishable to the caller)
        """
        try:
            user = self.store.get_user_by_email(email)
        except NotFoundError:
            logger.warning("Login failed: unknown email")
            raise AuthError(AuthFailure.BAD_CREDENTIALS) from None

        if not self.credentials.verify_password(password, user.password):
            logger.warning(f"Login failed: wrong password for user {user.id}")
            raise AuthError(AuthFailure.BAD_CREDENTIALS)

        token = self.credentials.issue_token(user.id, ttl_seconds)
        logger.info(f"User {user.id} logged in")
        return user, token

    def update_user(
        self,
        user_id: int,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        """
        Change the email and/or password of an authenticated user.

        Raises:
            ValidationError: If the new email belongs to another user
            NotFoundError: If the user no longer exists
        """
        if email is not None:
            self._ensure_email_available(email, allow_user_id=user_id)
        password_hash = self.credentials.hash_password(password) if password is not None else None
        return self.store.update_user(user_id, email=email, password=password_hash)

    def _ensure_email_available(self, email: str, allow_user_id: int | None = None) -> None:
        try:
            existing = self.store.get_user_by_email(email)
        except NotFoundError:
            return
        if existing.id != allow_user_id:
            raise ValidationError(
                "Email is already registered",
                code="EMAIL_TAKEN",
                suggestion="Log in instead, or use a different email address",
            )
