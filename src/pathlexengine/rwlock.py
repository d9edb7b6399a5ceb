"""Readers-writer lock guarding LocaleRegistry stores.

Lookups (render, find, fallback reads of the stores) share the lock;
define() and handle reverts take it exclusively.

Semantics:
    - Any number of concurrent readers OR one writer
    - Writer preference: new readers wait while a writer is waiting
    - Reads are reentrant per thread, so a read path may call another read path
    - Read-to-write upgrade, write-to-read downgrade and write reentry raise
      RuntimeError instead of deadlocking
    - Optional acquisition timeout raises TimeoutError

Python 3.13+.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     with lock.read():  # reentrant
        ...         pass
        >>> with lock.write(timeout=1.0):
        ...     pass
    """

    __slots__ = ("_condition", "_readers", "_waiting_writers", "_writer")

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        # thread id -> reentrant read depth
        self._readers: dict[int, int] = {}
        self._writer: int | None = None
        self._waiting_writers = 0

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock in shared mode for the duration of the block.

        Args:
            timeout: Seconds to wait; None waits indefinitely, 0.0 does not wait

        Raises:
            RuntimeError: If the thread holds the write lock
            TimeoutError: If the lock is not acquired in time
            ValueError: If timeout is negative
        """
        self._acquire_read(timeout)
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock exclusively for the duration of the block.

        Args:
            timeout: Seconds to wait; None waits indefinitely, 0.0 does not wait

        Raises:
            RuntimeError: If the thread already holds the read or write lock
            TimeoutError: If the lock is not acquired in time
            ValueError: If timeout is negative
        """
        self._acquire_write(timeout)
        try:
            yield
        finally:
            self._release_write()

    @staticmethod
    def _deadline(timeout: float | None) -> float | None:
        if timeout is None:
            return None
        if timeout < 0:
            msg = f"Timeout must be non-negative, got {timeout}"
            raise ValueError(msg)
        return time.monotonic() + timeout

    def _wait_while(self, blocked: Callable[[], bool], deadline: float | None, mode: str) -> None:
        # Caller holds self._condition.
        while blocked():
            if deadline is None:
                self._condition.wait()
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                msg = f"Timed out waiting for {mode} lock"
                raise TimeoutError(msg)
            self._condition.wait(timeout=remaining)

    def _acquire_read(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        ident = threading.get_ident()

        with self._condition:
            if ident in self._readers:
                self._readers[ident] += 1
                return
            if self._writer == ident:
                msg = "Cannot acquire read lock while holding write lock"
                raise RuntimeError(msg)

            self._wait_while(
                lambda: self._writer is not None or self._waiting_writers > 0,
                deadline,
                "read",
            )
            self._readers[ident] = 1

    def _release_read(self) -> None:
        ident = threading.get_ident()

        with self._condition:
            depth = self._readers.get(ident)
            if depth is None:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)
            if depth > 1:
                self._readers[ident] = depth - 1
                return
            del self._readers[ident]
            if not self._readers:
                self._condition.notify_all()

    def _acquire_write(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        ident = threading.get_ident()

        with self._condition:
            if ident in self._readers:
                msg = "Cannot upgrade read lock to write lock"
                raise RuntimeError(msg)
            if self._writer == ident:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)

            self._waiting_writers += 1
            try:
                self._wait_while(
                    lambda: bool(self._readers) or self._writer is not None,
                    deadline,
                    "write",
                )
                self._writer = ident
            finally:
                # Readers parked on waiting writers must re-check after a timeout too.
                self._waiting_writers -= 1
                self._condition.notify_all()

    def _release_write(self) -> None:
        with self._condition:
            if self._writer != threading.get_ident():
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._writer = None
            self._condition.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of distinct threads holding the read lock."""
        with self._condition:
            return len(self._readers)

    @property
    def writer_active(self) -> bool:
        """True while any thread holds the write lock."""
        with self._condition:
            return self._writer is not None
