# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable building blocks:
# - record_store.py: File-backed JSON document with atomic read-modify-write
# - rwlock.py: Readers-writer lock guarding the document
# - profanity.py: Chirp body word filter
# - utils.py: Error taxonomy (ChirpyError and friends), id parsing
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.utils import (
    AuthError,
    AuthFailure,
    ChirpyError,
    ErrorKind,
    NotFoundError,
    SerializationError,
    StorageError,
    ValidationError,
    parse_int,
    parse_positive_id,
)
from lib.rwlock import ReadWriteLock
from lib.profanity import clean_body
from lib.record_store import RecordStore

__all__ = [
    # Errors
    "AuthError",
    "AuthFailure",
    "ChirpyError",
    "ErrorKind",
    "NotFoundError",
    "SerializationError",
    "StorageError",
    "ValidationError",
    "parse_int",
    "parse_positive_id",
    # Storage
    "ReadWriteLock",
    "RecordStore",
    # Content
    "clean_body",
]
