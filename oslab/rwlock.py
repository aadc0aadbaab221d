"""A writer-priority read-write lock."""

import threading
from typing import Any

READER_LIMIT = (1 << 30) - 1


class RwLock:
    """Many readers or one writer; waiting writers block new readers.

    ``read`` and ``write`` block until the lock can be taken and return a
    guard. The guard gives access to the data and releases the lock through
    ``release`` or on leaving a ``with`` block.
    """

    def __init__(self, data: Any) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writer_holding = False
        self._writers_waiting = 0
        self._data = data

    def read(self) -> "ReadGuard":
        """Block until no writer holds or waits for the lock, then take a read lock."""
        with self._cond:
            self._cond.wait_for(
                lambda: not self._writer_holding
                and self._writers_waiting == 0
                and self._readers < READER_LIMIT
            )
            self._readers += 1
        return ReadGuard(self)

    def write(self) -> "WriteGuard":
        """Block until there are no readers and no writer, then take the write lock."""
        with self._cond:
            self._writers_waiting += 1
            try:
                self._cond.wait_for(
                    lambda: self._readers == 0 and not self._writer_holding
                )
            finally:
                self._writers_waiting -= 1
            self._writer_holding = True
        return WriteGuard(self)

    def _release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            self._cond.notify_all()

    def _release_write(self) -> None:
        with self._cond:
            self._writer_holding = False
            self._cond.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of read locks currently held."""
        with self._cond:
            return self._readers

    @property
    def writer_holding(self) -> bool:
        """True while a writer holds the lock."""
        with self._cond:
            return self._writer_holding

    @property
    def writers_waiting(self) -> int:
        """Number of writers blocked in ``write``."""
        with self._cond:
            return self._writers_waiting


class _Guard:
    def __init__(self, lock: RwLock) -> None:
        self._lock = lock
        self._held = True

    def _check_held(self) -> None:
        if not self._held:
            raise RuntimeError("lock guard has already been released")

    def _take_release(self) -> bool:
        """Mark the guard released; return True if it was still held."""
        if self._held:
            self._held = False
            return True
        return False

    @property
    def value(self) -> Any:
        """The protected data."""
        self._check_held()
        return self._lock._data

    def release(self) -> None:
        """Release the lock; later calls do nothing."""
        self._take_release()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class ReadGuard(_Guard):
    """Shared access to an RwLock's data."""

    def release(self) -> None:
        """Release the read lock; later calls do nothing."""
        if self._take_release():
            self._lock._release_read()


class WriteGuard(_Guard):
    """Exclusive access to an RwLock's data; the data may be replaced."""

    @property
    def value(self) -> Any:
        """The protected data."""
        self._check_held()
        return self._lock._data

    @value.setter
    def value(self, new: Any) -> None:
        self._check_held()
        self._lock._data = new

    def release(self) -> None:
        """Release the write lock; later calls do nothing."""
        if self._take_release():
            self._lock._release_write()