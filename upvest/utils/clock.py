"""Time source used for request signing."""

import time
from typing import Callable

Clock = Callable[[], int]


def timestamp() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())


def fixed_clock(value: int) -> Clock:
    """Return a clock that always reads ``value``.

    Example:
        >>> clock = fixed_clock(1700000000)
        >>> clock()
        1700000000
    """
    def clock() -> int:
        return value

    return clock
