"""Hand-written awaitables that hand control back to the event loop."""

from collections.abc import Generator


class CountDown:
    """Yields to the event loop ``count`` times, then returns ``"liftoff!"``."""

    def __init__(self, count: int) -> None:
        self.count = count

    def __await__(self) -> Generator[None, None, str]:
        while self.count > 0:
            self.count -= 1
            yield
        return "liftoff!"


class YieldOnce:
    """Yields to the event loop once, then completes with None."""

    def __init__(self) -> None:
        self.yielded = False

    def __await__(self) -> Generator[None, None, None]:
        if not self.yielded:
            self.yielded = True
            yield