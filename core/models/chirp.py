# =============================================================================
# core/models/chirp.py - Chirp Schemas
# =============================================================================
# These models define the API contract for chirp operations:
# - Chirp: A stored chirp record (also the API response shape)
# - ChirpCreate: Input for posting a new chirp
# - SortOrder: Ordering of chirp listings by id
#
# A chirp is a short text post owned by one user. Chirps are immutable
# once created.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field

# Maximum body length, counted in characters on the raw (untrimmed) body
MAX_CHIRP_LENGTH = 140


class SortOrder(str, Enum):
    """
    Ordering for chirp listings.

    Both orders sort by chirp id, which is also creation order.
    """
    ASC = "asc"
    DESC = "desc"


class Chirp(BaseModel):
    """
    A stored chirp.

    Persisted inside the document under "chirps" and returned as-is by
    the API (it holds nothing secret).

    Example:
        {
            "id": 3,
            "author_id": 1,
            "body": "Hello, world!"
        }
    """

    # Allocated by the record store (max + 1)
    id: int = Field(
        ...,
        ge=1,
        description="Unique chirp identifier"
    )

    # Advisory reference to a user; not enforced as a foreign key
    author_id: int = Field(
        ...,
        description="Id of the user who posted the chirp"
    )

    # Already profanity-masked when stored
    body: str = Field(
        ...,
        description="Chirp text"
    )


class ChirpCreate(BaseModel):
    """
    Request body for POST /api/chirps.

    Length rules are enforced by ChirpService, not here, so that an
    over-long body surfaces as the same VALIDATION_ERROR whether it
    arrives over HTTP or through a direct service call.
    """

    body: str = Field(
        ...,
        description=f"Chirp text (1-{MAX_CHIRP_LENGTH} characters)"
    )

    model_config = {
        "json_schema_extra": {
            "example": {"body": "I had something interesting for breakfast"}
        }
    }
