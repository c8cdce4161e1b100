# =============================================================================
# core/services/auth_service.py - Credential Service
# =============================================================================
# Protects passwords at rest and gates access to mutating operations:
# - bcrypt password hashing / verification
# - HS256 session tokens (python-jose) with a clamped lifetime
# - The single authorization gate used by every protected operation
#
# Tokens are never stored and never revoked; expiry is the only way a
# token stops working.
# =============================================================================

import logging
import time
from typing import Callable

import bcrypt
from jose import jwt, JWTError
from jose.exceptions import JWTClaimsError

from lib.utils import AuthError, AuthFailure, ValidationError

logger = logging.getLogger(__name__)

# Longest token lifetime we will issue (24 hours)
MAX_TOKEN_TTL_SECONDS = 24 * 60 * 60

TOKEN_ALGORITHM = "HS256"
DEFAULT_ISSUER = "chirpy"

BEARER_PREFIX = "Bearer "
API_KEY_PREFIX = "ApiKey "

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


def _extract_credential(authorization: str | None, prefix: str) -> str:
    """Return the credential after `prefix` in an Authorization header."""
    scheme = prefix.strip()
    if not authorization or not authorization.startswith(prefix):
        raise AuthError(AuthFailure.MISSING_CREDENTIAL, scheme=scheme)
    credential = authorization[len(prefix):].strip()
    if not credential:
        raise AuthError(AuthFailure.MISSING_CREDENTIAL, scheme=scheme)
    return credential


def extract_api_key(authorization: str | None) -> str:
    """
    Extract the key from an 'Authorization: ApiKey <key>' header.

    Raises:
        AuthError(MISSING_CREDENTIAL): If the header is absent or uses
            another scheme
    """
    return _extract_credential(authorization, API_KEY_PREFIX)


class CredentialService:
    """
    Password hashing and session token handling.

    Holds the signing secret, so create one instance at startup and share
    it (see app/state.py).

    Args:
        secret: HMAC key used to sign tokens
        issuer: Value of the "iss" claim; tokens with another issuer are rejected
        rounds: bcrypt work factor (log2 of iterations)
        clock: Returns the current UNIX time; injectable for tests

    Example:
        credentials = CredentialService(secret="s3cret")
        token = credentials.issue_token(user_id=1)
        credentials.validate_token(token)  # 1
    """

    def __init__(
        self,
        secret: str,
        issuer: str = DEFAULT_ISSUER,
        rounds: int = 12,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.issuer = issuer
        self.rounds = rounds
        self._clock = clock

    # =========================================================================
    # Passwords
    # =========================================================================

    def hash_password(self, plaintext: str) -> str:
        """
        Hash a password with bcrypt and a fresh random salt.

        Hashing the same password twice gives two different strings.

        Raises:
            ValidationError: If the password is longer than bcrypt accepts
        """
        encoded = plaintext.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(
                "Password is too long",
                code="PASSWORD_TOO_LONG",
                suggestion=f"Use at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify_password(self, plaintext: str, password_hash: str) -> bool:
        """Check a password against a stored bcrypt hash (constant time)."""
        encoded = plaintext.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Stored password hash is not a valid bcrypt hash: {e}")
            return False

    # =========================================================================
    # Tokens
    # =========================================================================

    @staticmethod
    def effective_ttl(requested_ttl_seconds: int | None) -> int:
        """
        Clamp a requested lifetime to (0, MAX_TOKEN_TTL_SECONDS].

        None, zero and negative values mean "as long as allowed".
        """
        if requested_ttl_seconds is None or requested_ttl_seconds <= 0:
            return MAX_TOKEN_TTL_SECONDS
        return min(requested_ttl_seconds, MAX_TOKEN_TTL_SECONDS)

    def issue_token(self, user_id: int, requested_ttl_seconds: int | None = None) -> str:
        """
        Issue a signed session token for `user_id`.

        Claims: sub (user id as string), iat, exp, iss.
        """
        now = int(self._clock())
        claims = {
            "iss": self.issuer,
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.effective_ttl(requested_ttl_seconds),
        }
        return jwt.encode(claims, self._secret, algorithm=TOKEN_ALGORITHM)

    def validate_token(self, token: str) -> int:
        """
        Verify a session token and return the user id it was issued for.

        Raises:
            AuthError(MALFORMED): Token cannot be parsed, lacks a usable
                sub/exp claim, or was issued by someone else
            AuthError(INVALID_SIGNATURE): Signature does not verify
            AuthError(EXPIRED): Current time is past the exp claim
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            logger.warning(f"Rejected unparseable token: {e}")
            raise AuthError(AuthFailure.MALFORMED) from e

        try:
            # Expiry is checked below against our own clock
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                issuer=self.issuer,
                options={"verify_exp": False, "verify_aud": False},
            )
        except JWTClaimsError as e:
            logger.warning(f"Rejected token with invalid claims: {e}")
            raise AuthError(AuthFailure.MALFORMED) from e
        except JWTError as e:
            logger.warning(f"Rejected token with invalid signature: {e}")
            raise AuthError(AuthFailure.INVALID_SIGNATURE) from e

        subject = claims.get("sub")
        expires_at = claims.get("exp")
        if (
            not isinstance(subject, str)
            or not subject.isdecimal()
            or not isinstance(expires_at, (int, float))
            or isinstance(expires_at, bool)
        ):
            logger.warning("Rejected token with missing or invalid sub/exp claims")
            raise AuthError(AuthFailure.MALFORMED)

        if self._clock() > expires_at:
            logger.warning(f"Rejected expired token for user {subject}")
            raise AuthError(AuthFailure.EXPIRED)

        return int(subject)

    # =========================================================================
    # Authorization gate
    # =========================================================================

    def authorize(self, authorization: str | None) -> int:
        """
        The authorization gate for protected operations.

        Takes the raw Authorization header value, requires the Bearer
        scheme and validates the token.

        Returns:
            The authenticated user's id

        Raises:
            AuthError(MISSING_CREDENTIAL): Header absent or not "Bearer ..."
            AuthError: Any validate_token failure
        """
        token = _extract_credential(authorization, BEARER_PREFIX)
        return self.validate_token(token)
