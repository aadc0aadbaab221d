"""A thread-safe 64-bit unsigned counter with compare-and-swap."""

import threading

_U64_MASK = (1 << 64) - 1


class CompareAndSwapError(Exception):
    """Raised when a compare-and-swap finds a value other than the expected one."""

    def __init__(self, actual: int) -> None:
        super().__init__(f"compare-and-swap failed: current value is {actual}")
        self.actual = actual


class AtomicCounter:
    """Unsigned 64-bit counter whose operations are atomic across threads.

    Increment and decrement wrap around like hardware atomics.
    """

    def __init__(self, init: int = 0) -> None:
        self._lock = threading.Lock()
        self._value = init & _U64_MASK

    def _fetch_update(self, delta: int) -> int:
        with self._lock:
            old = self._value
            self._value = (old + delta) & _U64_MASK
            return old

    def increment(self) -> int:
        """Add one and return the value before the increment."""
        return self._fetch_update(1)

    def decrement(self) -> int:
        """Subtract one and return the value before the decrement."""
        return self._fetch_update(-1)

    def get(self) -> int:
        """Return the current value."""
        with self._lock:
            return self._value

    def compare_and_swap(self, expected: int, new_val: int) -> int:
        """Set the value to ``new_val`` if it equals ``expected``.

        Returns ``expected`` on success; raises CompareAndSwapError carrying
        the actual value otherwise.
        """
        with self._lock:
            if self._value != expected:
                raise CompareAndSwapError(self._value)
            self._value = new_val & _U64_MASK
            return expected

    def fetch_multiply(self, multiplier: int) -> int:
        """Multiply the value atomically and return the value before.

        Raises OverflowError if the product does not fit in 64 bits.
        """
        while True:
            current = self.get()
            product = current * multiplier
            if product > _U64_MASK:
                raise OverflowError(f"{current} * {multiplier} overflows 64 bits")
            try:
                self.compare_and_swap(current, product)
            except CompareAndSwapError:
                continue
            return current