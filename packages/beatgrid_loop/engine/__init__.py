"""Sequencer engine components."""

from .clock import MonotonicClock
from .pattern_compiler import PatternCompiler
from .sequencer_controller import SequencerController
from .transport_scheduler import NO_STEP, TransportScheduler, poll_interval_ms, step_duration_ms

__all__ = [
    "MonotonicClock",
    "PatternCompiler",
    "SequencerController",
    "NO_STEP",
    "TransportScheduler",
    "poll_interval_ms",
    "step_duration_ms",
]
