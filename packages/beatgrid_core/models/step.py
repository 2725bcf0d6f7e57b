"""Per-step grid state."""

from dataclasses import dataclass


@dataclass
class StepState:
    """State of one (instrument, step) cell."""

    active: bool = False
    subdivision: int = 1  # 1 = not subdivided
