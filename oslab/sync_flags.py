"""Handing a value between threads and initialising a value exactly once."""

import threading

_U32_MAX = (1 << 32) - 1


def _check_u32(value: int) -> int:
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{value} does not fit in an unsigned 32-bit integer")
    return value


class FlagChannel:
    """A one-slot channel: the producer stores data, then raises a ready flag.

    The consumer waits for the flag and then reads the data, so it always
    sees the value written before the flag was raised.
    """

    def __init__(self) -> None:
        self._data = 0
        self._ready = threading.Event()

    def produce(self, value: int) -> None:
        """Store ``value`` and mark the channel ready.

        Raises ValueError unless ``value`` fits in 32 unsigned bits.
        """
        self._data = _check_u32(value)
        self._ready.set()

    def consume(self) -> int:
        """Block until the channel is ready, then return the stored value."""
        self._ready.wait()
        return self._data

    def reset(self) -> None:
        """Clear the ready flag and the stored value."""
        self._ready.clear()
        self._data = 0


class OnceCell:
    """Holds a 32-bit value that can be set only once."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._initialized = False
        self._value = 0

    def init(self, val: int) -> bool:
        """Store ``val`` if the cell is empty.

        Returns True for the single call that initialised the cell and False
        for every other call. Raises ValueError unless ``val`` fits in 32
        unsigned bits.
        """
        _check_u32(val)
        with self._lock:
            if self._initialized:
                return False
            self._value = val
            self._initialized = True
            return True

    def get(self) -> int | None:
        """Return the stored value, or None if the cell is still empty."""
        with self._lock:
            return self._value if self._initialized else None