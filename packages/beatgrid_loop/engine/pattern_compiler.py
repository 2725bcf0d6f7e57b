"""
Pattern Compiler

Turns grid rows into beat-pattern descriptors for the audio engine.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import TYPE_CHECKING

from beatgrid_core.models.pattern import BeatPattern, TrackPattern
from beatgrid_core.models.step import StepState

if TYPE_CHECKING:
    from ..state import GridModel

logger = logging.getLogger(__name__)


class PatternCompiler:
    """
    Compiles one instrument's steps into fractional beat positions.

    A step i with subdivision n fires at i, i + 1/n, ..., i + (n-1)/n.
    Steps are scanned in index order, so positions come out ascending.
    Sub-triggers are independent positions; nothing is bracketed.
    """

    def compile_steps(self, steps: list[StepState]) -> BeatPattern:
        """
        Compile a row of steps.

        Args:
            steps: Steps in index order

        Returns:
            BeatPattern (rest when no step is active)
        """
        positions: list[Fraction] = []
        for index, step in enumerate(steps):
            if not step.active:
                continue
            subdivision = step.subdivision
            positions.extend(
                index + Fraction(k, subdivision) for k in range(subdivision)
            )
        return BeatPattern(tuple(positions))

    def compile_instrument(self, grid: GridModel, instrument: str) -> BeatPattern:
        """Compile the row of one active instrument."""
        return self.compile_steps(grid.steps(instrument))

    def compile_grid(self, grid: GridModel, bank: str, bpm: float) -> list[TrackPattern]:
        """
        Compile every active instrument, in display order.

        Args:
            grid: Grid to compile
            bank: Sample bank name for every track
            bpm: Tempo for every track

        Returns:
            One TrackPattern per active instrument
        """
        tracks = []
        for instrument in grid.instruments:
            pattern = self.compile_instrument(grid, instrument)
            logger.debug(f"{instrument} pattern: {pattern} ({grid.steps_per_cycle} steps)")
            tracks.append(
                TrackPattern(
                    instrument=instrument,
                    pattern=pattern,
                    steps_per_cycle=grid.steps_per_cycle,
                    bank=bank,
                    bpm=bpm,
                )
            )
        return tracks
