# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - ChirpyError: the single tagged error type (kind + code + message)
# - parse_positive_id / parse_int: turn path/query strings into integers
# =============================================================================

from enum import Enum
from typing import Any


# =============================================================================
# Error Taxonomy
# =============================================================================

class ErrorKind(str, Enum):
    """
    Broad category of a failure.

    Callers match on the kind rather than on message text:
    - validation: malformed or out-of-range input (client error)
    - auth: bad credentials, bad/missing/expired token, wrong shared secret
    - not_found: referenced record is absent
    - storage: the backing file could not be read or written
    - serialization: the document could not be decoded or encoded
    """
    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    SERIALIZATION = "serialization"


class AuthFailure(str, Enum):
    """Reason attached to an AuthError."""
    MISSING_CREDENTIAL = "missing_credential"
    MALFORMED = "malformed"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    BAD_CREDENTIALS = "bad_credentials"
    WRONG_SECRET = "wrong_secret"


class ChirpyError(Exception):
    """
    Base error class for every failure the core reports.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        kind: ErrorKind used for dispatch (HTTP status, logging)
        code: Machine-readable error code
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        code: str | None = None,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or f"{self.kind.value.upper()}_ERROR"
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        result = {
            "detail": self.message,
            "code": self.code,
            "kind": self.kind.value,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(ChirpyError):
    """Raised when input is malformed or out of range."""
    kind = ErrorKind.VALIDATION


class AuthError(ChirpyError):
    """Raised when a request cannot be authenticated or authorized."""
    kind = ErrorKind.AUTH

    def __init__(
        self,
        reason: AuthFailure,
        message: str | None = None,
        scheme: str = "Bearer",
        **kwargs,
    ):
        super().__init__(
            message or _AUTH_MESSAGES[reason],
            code=kwargs.pop("code", "UNAUTHORIZED"),
            **kwargs,
        )
        self.reason = reason
        # Authorization scheme the caller should have used
        self.scheme = scheme

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["reason"] = self.reason.value
        return result


class NotFoundError(ChirpyError):
    """Raised when a referenced record does not exist."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, record_id: int | str, field: str = "id"):
        super().__init__(
            f"{resource.capitalize()} not found: {record_id}",
            code=f"{resource.upper()}_NOT_FOUND",
            suggestion=f"Check that the {resource} {field} is correct",
            details={f"{resource}_{field}": record_id},
        )
        self.resource = resource
        self.record_id = record_id


class StorageError(ChirpyError):
    """Raised when the document file cannot be read or written."""
    kind = ErrorKind.STORAGE


class SerializationError(ChirpyError):
    """Raised when the document cannot be decoded or encoded."""
    kind = ErrorKind.SERIALIZATION


_AUTH_MESSAGES = {
    AuthFailure.MISSING_CREDENTIAL: "Missing or malformed authorization header",
    AuthFailure.MALFORMED: "Token could not be parsed",
    AuthFailure.INVALID_SIGNATURE: "Token signature is invalid",
    AuthFailure.EXPIRED: "Token has expired",
    AuthFailure.BAD_CREDENTIALS: "Incorrect email or password",
    AuthFailure.WRONG_SECRET: "Invalid API key",
}


# =============================================================================
# Identifier Parsing
# =============================================================================

def parse_positive_id(value: str, field: str = "id") -> int:
    """
    Parse a decimal identifier coming from a path or query string.

    Args:
        value: Raw string (e.g. "42")
        field: Field name used in the error message

    Returns:
        The identifier as an int

    Raises:
        ValidationError: If the value is not a positive decimal integer

    Example:
        parse_positive_id("7", "chirp_id")    # 7
        parse_positive_id("abc", "chirp_id")  # ValidationError
    """
    if not value.isascii() or not value.isdecimal() or int(value) < 1:
        raise ValidationError(
            f"Invalid {field}: {value!r}",
            code="INVALID_ID",
            suggestion=f"{field} must be a positive integer",
            details={field: value},
        )
    return int(value)


def parse_int(value: str, field: str) -> int:
    """
    Parse an optionally signed decimal integer from a query string.

    Unlike parse_positive_id, zero and negative values are accepted; they
    simply match no records.

    Raises:
        ValidationError: If the value is not a decimal integer

    Example:
        parse_int("-1", "author_id")   # -1
        parse_int("1.5", "author_id")  # ValidationError
    """
    digits = value[1:] if value[:1] in ("+", "-") else value
    if not digits.isascii() or not digits.isdecimal():
        raise ValidationError(
            f"Invalid {field}: {value!r}",
            code="INVALID_ID",
            suggestion=f"{field} must be an integer",
            details={field: value},
        )
    return int(value)
