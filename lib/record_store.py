# =============================================================================
# lib/record_store.py - File-Backed Record Store
# =============================================================================
# Single source of truth for users and chirps. The whole database is one
# JSON document on disk; every operation works on the complete document:
#
#   mutation:  write lock -> read + decode -> mutate -> encode -> write -> unlock
#   read:      read lock  -> read + decode -> unlock
#
# The lock covers the entire cycle, not just the I/O calls. Identifier
# allocation (max + 1) happens inside that same critical section.
#
# Writes go to a temporary file in the same directory which is fsynced and
# renamed over the document, so readers never observe a partial write.
#
# One RecordStore instance per document per process. There is no
# inter-process locking.
#
# Usage:
#   store = RecordStore("database.json")
#   store.ensure_document()
#   chirp = store.create_chirp(author_id=1, body="hello")
# =============================================================================

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, TypeVar

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from core.models import Chirp, Document, User
from lib.rwlock import ReadWriteLock
from lib.utils import NotFoundError, SerializationError, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordStore:
    """
    Atomic create/read/update operations over the persisted document.

    Every public method reloads the document from disk, so callers always
    get fresh record copies; mutating a returned model does not touch
    storage.

    Example:
        store = RecordStore(tmp_path / "database.json")
        store.ensure_document()
        user = store.create_user("a@x.com", password_hash)
        store.set_chirpy_red(user.id, True)
    """

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)
        self._lock = ReadWriteLock()

    # =========================================================================
    # Bootstrap
    # =========================================================================

    def ensure_document(self) -> bool:
        """
        Create an empty document if none exists yet.

        Returns:
            True if a new document was written, False if one already existed
        """
        with self._lock.write_locked():
            if self.path.exists():
                return False
            self._write(Document())
            logger.info(f"Initialized empty database at {self.path}")
            return True

    def reset(self) -> None:
        """Replace the document with an empty one."""
        with self._lock.write_locked():
            self._write(Document())
            logger.warning(f"Database reset: {self.path}")

    def load_document(self) -> Document:
        """Read and decode the full document under the shared lock."""
        with self._lock.read_locked():
            return self._read()

    # =========================================================================
    # Chirps
    # =========================================================================

    def create_chirp(self, author_id: int, body: str) -> Chirp:
        """
        Allocate the next chirp id, store the chirp and persist.

        Raises:
            StorageError: If the document cannot be read or written
            SerializationError: If the document cannot be decoded or encoded
        """
        chirp = self._mutate(lambda doc: doc.add_chirp(author_id, body))
        logger.info(f"Created chirp {chirp.id} for author {author_id}")
        return chirp

    def list_chirps(self) -> list[Chirp]:
        """All chirps ordered by ascending id. Empty store gives []."""
        return self.load_document().sorted_chirps()

    def get_chirp(self, chirp_id: int) -> Chirp:
        """
        Raises:
            NotFoundError: If no chirp has this id
        """
        chirp = self.load_document().chirps.get(chirp_id)
        if chirp is None:
            raise NotFoundError("chirp", chirp_id)
        return chirp

    # =========================================================================
    # Users
    # =========================================================================

    def create_user(self, email: str, password_hash: str) -> User:
        """
        Allocate the next user id and store the user.

        Email uniqueness is NOT checked here; that is up to the caller.
        """
        user = self._mutate(lambda doc: doc.add_user(email, password_hash))
        logger.info(f"Created user {user.id}")
        return user

    def get_user(self, user_id: int) -> User:
        user = self.load_document().users.get(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def get_user_by_email(self, email: str) -> User:
        """
        Look a user up by exact (case-sensitive) email.

        Raises:
            NotFoundError: If no user has this email
        """
        user = self.load_document().find_user_by_email(email)
        if user is None:
            raise NotFoundError("user", email, field="email")
        return user

    def update_user(
        self,
        user_id: int,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        """
        Partially update a user's email and/or password hash.

        Fields left as None keep their stored value.

        Raises:
            NotFoundError: If no user has this id
        """
        changes = {}
        if email is not None:
            changes["email"] = email
        if password is not None:
            changes["password"] = password

        def apply(doc: Document) -> User:
            user = doc.users.get(user_id)
            if user is None:
                raise NotFoundError("user", user_id)
            updated = user.model_copy(update=changes)
            doc.replace_user(updated)
            return updated

        user = self._mutate(apply)
        logger.info(f"Updated user {user_id} ({', '.join(changes) or 'no fields'})")
        return user

    def set_chirpy_red(self, user_id: int, value: bool = True) -> User:
        """
        Set the subscription flag. Idempotent: repeating it is not an error.

        Raises:
            NotFoundError: If no user has this id
        """
        def apply(doc: Document) -> User:
            user = doc.users.get(user_id)
            if user is None:
                raise NotFoundError("user", user_id)
            updated = user.model_copy(update={"is_chirpy_red": value})
            doc.replace_user(updated)
            return updated

        user = self._mutate(apply)
        logger.info(f"Set is_chirpy_red={value} for user {user_id}")
        return user

    # =========================================================================
    # Read-modify-write machinery
    # =========================================================================

    def _mutate(self, change: Callable[[Document], T]) -> T:
        """
        Run one read-modify-write cycle under the exclusive lock.

        If `change` raises, nothing is written.
        """
        with self._lock.write_locked():
            document = self._read()
            result = change(document)
            self._write(document)
            return result

    def _read(self) -> Document:
        """Read and decode the document. Caller must hold a lock."""
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read database {self.path}: {e}")
            raise StorageError(
                f"Failed to read database: {e}",
                code="STORAGE_READ_ERROR",
                suggestion="Check that the database file exists and is readable",
                details={"path": str(self.path)},
            ) from e

        try:
            return Document.model_validate_json(raw)
        except (PydanticValidationError, ValueError) as e:
            logger.error(f"Database {self.path} is corrupt: {e}")
            raise SerializationError(
                "Failed to decode database document",
                code="DOCUMENT_DECODE_ERROR",
                suggestion="Restore the database file from a backup or reset it",
                details={"path": str(self.path), "error": str(e)},
            ) from e

    def _write(self, document: Document) -> None:
        """Encode and atomically replace the document. Caller must hold the write lock."""
        try:
            payload = document.model_dump_json().encode("utf-8")
        except PydanticSerializationError as e:
            logger.error(f"Failed to encode database document: {e}")
            raise SerializationError(
                "Failed to encode database document",
                code="DOCUMENT_ENCODE_ERROR",
                details={"error": str(e)},
            ) from e

        try:
            with self._temp_file() as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as e:
            logger.error(f"Failed to write database {self.path}: {e}")
            raise StorageError(
                f"Failed to write database: {e}",
                code="STORAGE_WRITE_ERROR",
                suggestion="Check disk space and permissions on the database directory",
                details={"path": str(self.path)},
            ) from e

    @contextmanager
    def _temp_file(self) -> Iterator[BinaryIO]:
        """
        Yield an open temp file next to the document; rename it over the
        document on success, remove it on failure.
        """
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                yield handle
            os.replace(tmp_name, self.path)
            _fsync_directory(directory)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise


def _fsync_directory(directory: Path) -> None:
    """Flush a directory entry (e.g. a rename) to disk."""
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)
