"""
Transport Scheduler

Produces the "current step" highlight signal from wall-clock time.

It never talks to the audio engine. Engine and highlight are assumed to
share tempo and start instant by convention. The step is recomputed from
absolute elapsed time on every poll, never counted.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable

from beatgrid_core.constants import (
    DEFAULT_DIVISOR,
    MAX_POLL_INTERVAL_MS,
    TRIPLE_MEASURE_DIVISOR,
)
from beatgrid_core.protocols import ClockSource

from .clock import MonotonicClock

logger = logging.getLogger(__name__)

# Emitted on stop: renderers clear every highlighted cell
NO_STEP = -1


def step_duration_ms(bpm: float, measure: int, steps_per_cycle: int) -> float:
    """
    Duration of one highlighted step in milliseconds.

    The divisor (1.5 for 3/4, 2 otherwise) matches the pattern engine's
    own cycle length and must not be re-derived.

    Example:
        >>> step_duration_ms(120, 4, 16)
        62.5
    """
    cycle_duration_ms = measure * (60 / bpm) * 1000
    divisor = TRIPLE_MEASURE_DIVISOR if measure == 3 else DEFAULT_DIVISOR
    return (cycle_duration_ms / steps_per_cycle) / divisor


def poll_interval_ms(step_ms: float) -> float:
    """Poll cadence: half a step, capped at 50ms."""
    return min(step_ms / 2, MAX_POLL_INTERVAL_MS)


class TransportScheduler:
    """
    Stopped/Running highlight clock.

    Stopped -> Running on start(): records start_time, emits step 0
    immediately, then polls on the asyncio loop every poll_interval_ms.
    Running -> Stopped on stop(): cancels polling, clears start_time and
    emits NO_STEP.

    Each start bumps a generation token and the poll task carries the token
    it was created with. A poll whose token is stale publishes nothing, so
    a wake-up that slipped past cancellation cannot leak into a newer run.

    Without a running event loop, start() schedules no task and the owner
    drives the clock by calling poll().
    """

    def __init__(
        self,
        on_step: Callable[[int], None],
        clock: ClockSource | None = None,
    ):
        """
        Args:
            on_step: Called with the current step (or NO_STEP on stop)
            clock: Millisecond clock (default: MonotonicClock)
        """
        self._on_step = on_step
        self._clock = clock or MonotonicClock()

        self._start_time: float | None = None
        self._step_duration_ms: float = 0.0
        self._steps_per_cycle: int = 0
        self._current_step: int = NO_STEP

        self._generation: int = 0
        self._task: asyncio.Task[None] | None = None

    # ================================================================
    # State
    # ================================================================

    @property
    def running(self) -> bool:
        return self._start_time is not None

    @property
    def start_time(self) -> float | None:
        return self._start_time

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def step_duration_ms(self) -> float:
        return self._step_duration_ms

    @property
    def steps_per_cycle(self) -> int:
        return self._steps_per_cycle

    def step_at(self, now_ms: float) -> int:
        """
        Step index at a given clock time.

        floor(elapsed / step_duration) mod steps_per_cycle
        """
        if self._start_time is None:
            return NO_STEP
        elapsed = now_ms - self._start_time
        return math.floor(elapsed / self._step_duration_ms) % self._steps_per_cycle

    # ================================================================
    # Lifecycle
    # ================================================================

    def start(self, step_ms: float, steps_per_cycle: int) -> None:
        """
        Start (or restart) the highlight clock.

        Args:
            step_ms: Step duration in milliseconds
            steps_per_cycle: Steps before the highlight wraps to 0
        """
        if step_ms <= 0 or steps_per_cycle <= 0:
            raise ValueError(
                f"step_ms and steps_per_cycle must be positive, "
                f"got {step_ms} and {steps_per_cycle}"
            )

        if self.running:
            self._cancel()

        self._generation += 1
        generation = self._generation
        self._step_duration_ms = step_ms
        self._steps_per_cycle = steps_per_cycle
        self._start_time = self._clock.now_ms()

        self.poll(generation)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, highlight clock is polled manually")
            return
        self._task = loop.create_task(self._poll_loop(generation))

        logger.debug(
            f"Highlight clock started (gen {generation}): "
            f"{step_ms:.2f}ms/step, {steps_per_cycle} steps, "
            f"poll every {poll_interval_ms(step_ms):.2f}ms"
        )

    def stop(self) -> None:
        """Stop the highlight clock and emit NO_STEP. No-op when stopped."""
        if not self.running:
            return
        self._cancel()
        self._current_step = NO_STEP
        self._on_step(NO_STEP)
        logger.debug("Highlight clock stopped")

    def poll(self, generation: int | None = None) -> int:
        """
        Recompute and emit the current step.

        Args:
            generation: Token of the caller; stale tokens are dropped

        Returns:
            The emitted step, or NO_STEP if nothing was emitted
        """
        if not self.running:
            return NO_STEP
        if generation is not None and generation != self._generation:
            logger.debug(f"Dropped stale tick (gen {generation}, current {self._generation})")
            return NO_STEP

        step = self.step_at(self._clock.now_ms())
        self._current_step = step
        self._on_step(step)
        return step

    # ================================================================
    # Internal
    # ================================================================

    def _cancel(self) -> None:
        """Invalidate the current generation and cancel its poll task."""
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._start_time = None

    async def _poll_loop(self, generation: int) -> None:
        interval = poll_interval_ms(self._step_duration_ms) / 1000.0
        while generation == self._generation:
            await asyncio.sleep(interval)
            if generation != self._generation:
                break
            try:
                self.poll(generation)
            except Exception as e:
                logger.error(f"Highlight tick failed: {e}", exc_info=True)
