"""Beatgrid data models."""

from .pattern import REST, BeatPattern, TrackPattern, format_position, stack_to_strudel
from .snapshot import InstrumentView, SequencerSnapshot, StepView
from .step import StepState

__all__ = [
    "REST",
    "BeatPattern",
    "TrackPattern",
    "format_position",
    "stack_to_strudel",
    "InstrumentView",
    "SequencerSnapshot",
    "StepView",
    "StepState",
]
