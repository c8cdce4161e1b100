# =============================================================================
# core/services/chirp_service.py - Chirp Business Logic
# =============================================================================
# Enforces content rules before anything reaches the record store:
# - body must be 1-140 characters (raw length, no trimming)
# - blocked words are masked
# Listing supports an optional author filter and ascending/descending order.
# =============================================================================

import logging
from typing import Callable

from core.models import MAX_CHIRP_LENGTH, Chirp, SortOrder
from lib.profanity import clean_body
from lib.record_store import RecordStore
from lib.utils import ValidationError

logger = logging.getLogger(__name__)


class ChirpService:
    """
    Service for chirp operations.

    Provides a clean interface between API routes and the record store.
    """

    def __init__(
        self,
        store: RecordStore,
        body_filter: Callable[[str], str] = clean_body,
    ):
        self.store = store
        self.body_filter = body_filter

    def submit(self, author_id: int, body: str) -> Chirp:
        """
        Validate, clean and store a new chirp.

        Args:
            author_id: Authenticated user posting the chirp
            body: Raw chirp text

        Returns:
            The stored chirp (with its cleaned body)

        Raises:
            ValidationError: If the body is empty or longer than 140 characters
        """
        if not body:
            raise ValidationError(
                "Chirp body is empty",
                code="CHIRP_EMPTY",
                suggestion="Write at least one character",
            )
        if len(body) > MAX_CHIRP_LENGTH:
            raise ValidationError(
                f"Chirp is too long: {len(body)} characters (max: {MAX_CHIRP_LENGTH})",
                code="CHIRP_TOO_LONG",
                suggestion=f"Shorten the chirp to {MAX_CHIRP_LENGTH} characters or fewer",
                details={"length": len(body), "max_length": MAX_CHIRP_LENGTH},
            )

        return self.store.create_chirp(author_id, self.body_filter(body))

    def list_chirps(
        self,
        author_id: int | None = None,
        sort: SortOrder = SortOrder.ASC,
    ) -> list[Chirp]:
        """
        List chirps, optionally only those by one author.

        Args:
            author_id: If provided, keep only chirps by this user
            sort: Order by id, ascending (default) or descending

        Returns:
            List of chirps (possibly empty)
        """
        chirps = self.store.list_chirps()
        if author_id is not None:
            chirps = [chirp for chirp in chirps if chirp.author_id == author_id]
        if sort == SortOrder.DESC:
            chirps.reverse()
        return chirps

    def get_chirp(self, chirp_id: int) -> Chirp:
        """
        Raises:
            NotFoundError: If no chirp has this id
        """
        return self.store.get_chirp(chirp_id)
