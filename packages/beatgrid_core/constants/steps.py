"""Step-related constants for the Beatgrid sequencer.

Steps per beat is fixed; the cycle length follows the measure.
"""

from typing import Final

# Timing subdivisions
STEPS_PER_BEAT: Final[int] = 4  # 16th note per beat
DEFAULT_MEASURE: Final[int] = 4  # 4/4 -> 16 steps per cycle
MIN_MEASURE: Final[int] = 3  # 3/4 -> 12 steps per cycle

# Allowed per-step subdivisions (1 = not subdivided)
SUBDIVISIONS: Final[tuple[int, ...]] = (1, 2, 3, 4)

# Highlight rate divisors, matched by ear against the pattern engine's
# cycle length. Compatibility constants: keep as-is.
TRIPLE_MEASURE_DIVISOR: Final[float] = 1.5
DEFAULT_DIVISOR: Final[float] = 2.0

# Upper bound on the highlight poll cadence
MAX_POLL_INTERVAL_MS: Final[float] = 50.0
