"""Default clock source."""

import time


class MonotonicClock:
    """Milliseconds from time.perf_counter (monotonic, high resolution)."""

    def now_ms(self) -> float:
        return time.perf_counter() * 1000.0
