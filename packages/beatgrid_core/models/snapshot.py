"""Observable state published to renderers.

Pydantic models so the HTTP layer and SSE stream can serialize them as-is.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class InstrumentView(BaseModel):
    """Active instrument row."""

    id: str
    name: str


class StepView(BaseModel):
    """One step cell as seen by a renderer."""

    active: bool = False
    subdivision: int = Field(default=1, ge=1, le=4)


class SequencerSnapshot(BaseModel):
    """
    Full sequencer state for one render pass.

    current_step is -1 when nothing is highlighted; renderers must clear
    every highlighted cell when they see it.
    """

    instruments: list[InstrumentView] = Field(default_factory=list)
    measure: int
    steps_per_cycle: int
    bpm: float
    bank: str
    banks: list[str] = Field(default_factory=list)
    steps: dict[str, list[StepView]] = Field(default_factory=dict)
    current_step: int = -1
    is_playing: bool = False
