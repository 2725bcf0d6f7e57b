"""Clock protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockSource(Protocol):
    """
    Monotonic time source in milliseconds.

    Implementations:
        - MonotonicClock: time.perf_counter based
        - FakeClock: manually advanced test double
    """

    def now_ms(self) -> float:
        """Current monotonic time in milliseconds."""
        ...
