"""A busy-waiting lock with explicit and scoped release."""

import threading
import time
from typing import Any


class SpinLock:
    """Mutual exclusion by spinning on a flag until it can be claimed.

    ``lock`` and ``try_lock`` hand back a SpinGuard through which the
    protected data is read and replaced; the lock is released by ``unlock``,
    by ``SpinGuard.release`` or by leaving a ``with`` block on the guard.
    """

    def __init__(self, data: Any) -> None:
        self._flag = threading.Lock()  # makes test-and-set on _locked atomic
        self._locked = False
        self._data = data

    def _try_acquire(self) -> bool:
        with self._flag:
            if self._locked:
                return False
            self._locked = True
            return True

    def lock(self) -> "SpinGuard":
        """Spin until the lock is free, take it and return a guard."""
        while not self._try_acquire():
            time.sleep(0)
        return SpinGuard(self)

    def unlock(self) -> None:
        """Release the lock."""
        with self._flag:
            self._locked = False

    def try_lock(self) -> "SpinGuard | None":
        """Take the lock if it is free; return a guard, or None if it is busy."""
        if self._try_acquire():
            return SpinGuard(self)
        return None

    def guard(self) -> "SpinGuard":
        """Take the lock for a ``with`` block that releases it on exit."""
        return self.lock()

    @property
    def locked(self) -> bool:
        """True while some holder has the lock."""
        with self._flag:
            return self._locked


class SpinGuard:
    """Access to a SpinLock's data while the lock is held."""

    def __init__(self, lock: SpinLock) -> None:
        self._lock = lock
        self._held = True

    def _check_held(self) -> None:
        if not self._held:
            raise RuntimeError("spin lock guard has already been released")

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
        """Release the lock; later calls do nothing."""
        if self._held:
            self._held = False
            self._lock.unlock()

    def __enter__(self) -> "SpinGuard":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()