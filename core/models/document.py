# =============================================================================
# core/models/document.py - Persisted Document Schema
# =============================================================================
# The whole database is one JSON object holding two keyed mappings:
#
#   { "chirps": { "<id>": {"id": 1, "author_id": 1, "body": "..."} },
#     "users":  { "<id>": {"id": 1, "email": "...", "password": "...",
#                          "is_chirpy_red": false} } }
#
# Keys are decimal strings on disk and ints in memory. The record store
# reads, mutates and rewrites this document as a single unit.
# =============================================================================

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from .chirp import Chirp
from .user import User


class Document(BaseModel):
    """
    In-memory form of the persisted document.

    Besides the two mappings it keeps an email -> user id index, rebuilt
    on load and maintained by add_user() / replace_user(). Mutate users
    only through those methods or the index goes stale.
    """

    chirps: dict[int, Chirp] = Field(default_factory=dict)
    users: dict[int, User] = Field(default_factory=dict)

    _email_index: dict[str, int] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_keys_match_ids(self) -> "Document":
        for key, chirp in self.chirps.items():
            if key != chirp.id:
                raise ValueError(f"chirp stored under key {key} has id {chirp.id}")
        for key, user in self.users.items():
            if key != user.id:
                raise ValueError(f"user stored under key {key} has id {user.id}")
        return self

    def model_post_init(self, __context) -> None:
        self._reindex_emails()

    # -------------------------------------------------------------------------
    # Identifier allocation
    # -------------------------------------------------------------------------

    def next_chirp_id(self) -> int:
        """Max-plus-one over existing chirp ids (1 when empty)."""
        return max(self.chirps, default=0) + 1

    def next_user_id(self) -> int:
        """Max-plus-one over existing user ids (1 when empty)."""
        return max(self.users, default=0) + 1

    # -------------------------------------------------------------------------
    # Chirps
    # -------------------------------------------------------------------------

    def add_chirp(self, author_id: int, body: str) -> Chirp:
        chirp = Chirp(id=self.next_chirp_id(), author_id=author_id, body=body)
        self.chirps[chirp.id] = chirp
        return chirp

    def sorted_chirps(self) -> list[Chirp]:
        """All chirps, ascending by id."""
        return [self.chirps[key] for key in sorted(self.chirps)]

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def add_user(self, email: str, password_hash: str) -> User:
        user = User(id=self.next_user_id(), email=email, password=password_hash)
        self.users[user.id] = user
        # Keep the lowest id when duplicates exist, matching a linear scan
        self._email_index.setdefault(email, user.id)
        return user

    def replace_user(self, user: User) -> None:
        old = self.users.get(user.id)
        self.users[user.id] = user
        if old is not None and old.email != user.email:
            self._reindex_emails()
        else:
            self._email_index.setdefault(user.email, user.id)

    def find_user_by_email(self, email: str) -> User | None:
        user_id = self._email_index.get(email)
        return self.users.get(user_id) if user_id is not None else None

    def _reindex_emails(self) -> None:
        self._email_index = {}
        for key in sorted(self.users):
            self._email_index.setdefault(self.users[key].email, key)
