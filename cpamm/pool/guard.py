"""Mutual exclusion for a pool's mutating operations."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from cpamm.errors import ReentrancyError


class ReentrancyGuard:
    """Serializes mutating operations and rejects re-entry.

    Another thread entering while an operation is in flight blocks until
    it finishes. The thread already inside (e.g. a ledger hook or event
    listener calling back into the pool) gets ReentrancyError instead of
    a deadlock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._owner: int | None = None
        self._operation: str | None = None

    @contextmanager
    def enter(self, operation: str) -> Iterator[None]:
        """Hold the guard for the duration of one operation.

        Raises:
            ReentrancyError: If the current thread already holds the guard
        """
        me = threading.get_ident()
        if self._owner == me:
            raise ReentrancyError(
                f"Re-entrant call to {operation} while {self._operation} is in progress"
            )
        with self._lock:
            self._owner = me
            self._operation = operation
            try:
                yield
            finally:
                self._owner = None
                self._operation = None

    @property
    def locked(self) -> bool:
        """True while an operation holds the guard."""
        return self._lock.locked()
