# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - User: The stored user record (includes the password hash)
# - UserCreate / UserUpdate: Inputs for signup and credential update
# - UserResponse: Public view of a user (never includes the hash)
# - LoginRequest / LoginResponse: Token issuance
# =============================================================================

from pydantic import BaseModel, Field


class User(BaseModel):
    """
    A stored user.

    The "password" field holds the bcrypt hash, never the plaintext.
    It is named to match the persisted document format.
    """

    id: int = Field(
        ...,
        ge=1,
        description="Unique user identifier"
    )

    # Case-sensitive as stored
    email: str = Field(
        ...,
        description="User email address"
    )

    password: str = Field(
        ...,
        description="bcrypt hash of the user's password"
    )

    # Set by the payment provider webhook; absent in older documents
    is_chirpy_red: bool = Field(
        default=False,
        description="Whether the user has upgraded to Chirpy Red"
    )

    def to_response(self) -> "UserResponse":
        """Public view of this user, without the password hash."""
        return UserResponse(
            id=self.id,
            email=self.email,
            is_chirpy_red=self.is_chirpy_red,
        )


class UserCreate(BaseModel):
    """
    Request body for POST /api/users (signup).

    Example:
        {
            "email": "a@x.com",
            "password": "secret"
        }
    """

    email: str = Field(
        ...,
        min_length=1,
        max_length=320,
        description="Email address used to log in"
    )

    password: str = Field(
        ...,
        min_length=1,
        description="Plaintext password (hashed before storage)"
    )


class UserUpdate(BaseModel):
    """
    Request body for PUT /api/users.

    Only the fields that are provided are changed.
    """

    email: str | None = Field(
        default=None,
        min_length=1,
        max_length=320,
        description="New email address"
    )

    password: str | None = Field(
        default=None,
        min_length=1,
        description="New plaintext password"
    )


class UserResponse(BaseModel):
    """
    Public user representation returned by the API.

    Example:
        {
            "id": 1,
            "email": "a@x.com",
            "is_chirpy_red": false
        }
    """

    id: int
    email: str
    is_chirpy_red: bool = False


class LoginRequest(BaseModel):
    """
    Request body for POST /api/login.

    expires_in_seconds is optional; values above one day, zero or
    negative values all yield a one-day token.
    """

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    expires_in_seconds: int | None = Field(
        default=None,
        description="Requested token lifetime in seconds (max 86400)"
    )


class LoginResponse(UserResponse):
    """User representation plus the issued session token."""

    token: str = Field(
        ...,
        description="Signed session token; send as 'Authorization: Bearer <token>'"
    )
