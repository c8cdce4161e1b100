# =============================================================================
# lib/rwlock.py - Readers-Writer Lock
# =============================================================================
# Shared/exclusive lock used by the record store.
#
# - Any number of readers may hold the lock together.
# - A writer excludes readers and other writers.
# - Writer-preferring: once a writer is waiting, new readers queue behind it.
#
# Usage:
#   lock = ReadWriteLock()
#   with lock.read_locked():
#       ...
#   with lock.write_locked():
#       ...
# =============================================================================

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """
    Readers-writer lock built on a single condition variable.

    Not reentrant: a thread holding the write lock must not try to
    take it again, or to take the read lock.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    # -------------------------------------------------------------------------
    # Shared side
    # -------------------------------------------------------------------------

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("release_read() called without a held read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    # -------------------------------------------------------------------------
    # Exclusive side
    # -------------------------------------------------------------------------

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer_active:
                raise RuntimeError("release_write() called without a held write lock")
            self._writer_active = False
            self._cond.notify_all()

    # -------------------------------------------------------------------------
    # Context managers
    # -------------------------------------------------------------------------

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the shared lock for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive lock for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        """Number of threads currently holding the shared lock."""
        with self._cond:
            return self._readers

    @property
    def writer_active(self) -> bool:
        with self._cond:
            return self._writer_active
