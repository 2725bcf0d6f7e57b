"""
Beatgrid Grid Model

Instruments × steps × subdivisions. The single source of truth for what
the grid holds; renderers only ever see snapshots of it.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from beatgrid_core.constants import (
    DEFAULT_MEASURE,
    INSTRUMENT_NAMES,
    MIN_MEASURE,
    STEPS_PER_BEAT,
    SUBDIVISIONS,
)
from beatgrid_core.exceptions import InvalidArgument, OutOfRange, UnknownInstrument
from beatgrid_core.models.step import StepState

logger = logging.getLogger(__name__)


class GridModel:
    """
    Step grid for the active instrument set.

    Invariant: every active instrument owns exactly steps_per_cycle
    StepState entries, indices 0..steps_per_cycle-1, no gaps.

    Every mutator validates first and mutates second, so a failing call
    leaves the grid exactly as it was.
    """

    def __init__(
        self,
        instruments: list[str] | tuple[str, ...] = (),
        measure: int = DEFAULT_MEASURE,
        instrument_names: dict[str, str] | None = None,
    ):
        self._check_measure(measure)
        self._measure = measure
        self._names = dict(INSTRUMENT_NAMES if instrument_names is None else instrument_names)

        # Insertion order = display order
        self._rows: dict[str, list[StepState]] = {}
        for instrument in instruments:
            self.add_instrument(instrument)

    # ================================================================
    # Cycle configuration
    # ================================================================

    @property
    def measure(self) -> int:
        return self._measure

    @property
    def steps_per_beat(self) -> int:
        return STEPS_PER_BEAT

    @property
    def steps_per_cycle(self) -> int:
        return self._measure * STEPS_PER_BEAT

    def set_measure(self, measure: int) -> None:
        """
        Change beats per cycle.

        Steps at indices >= the new steps_per_cycle are discarded (not
        hidden); new trailing steps start at their defaults.
        """
        self._check_measure(measure)
        self._measure = measure
        length = self.steps_per_cycle
        for row in self._rows.values():
            if len(row) > length:
                del row[length:]
            else:
                row.extend(StepState() for _ in range(length - len(row)))
        logger.debug(f"Measure set to {measure} ({length} steps per cycle)")

    # ================================================================
    # Instruments
    # ================================================================

    @property
    def instruments(self) -> list[str]:
        """Active instrument ids in display order."""
        return list(self._rows)

    def has_instrument(self, instrument: str) -> bool:
        return instrument in self._rows

    def display_name(self, instrument: str) -> str:
        """Catalog name for a known code, else the code itself."""
        return self._names.get(instrument, instrument)

    def available_to_add(self) -> list[str]:
        """Catalog instruments not yet on the grid, in catalog order."""
        return [code for code in self._names if code not in self._rows]

    def add_instrument(self, instrument: str) -> bool:
        """
        Append an instrument row with default steps.

        Returns:
            False (and changes nothing) if the instrument is already active
        """
        if instrument in self._rows:
            return False
        self._rows[instrument] = [StepState() for _ in range(self.steps_per_cycle)]
        return True

    def remove_instrument(self, instrument: str) -> bool:
        """
        Remove an instrument row and discard all of its step data.

        Returns:
            False if the instrument was not active
        """
        if instrument not in self._rows:
            return False
        del self._rows[instrument]
        return True

    # ================================================================
    # Steps
    # ================================================================

    def step(self, instrument: str, index: int) -> StepState:
        """Get one step (live object; do not mutate from outside)."""
        row = self._row(instrument)
        self._check_index(index)
        return row[index]

    def steps(self, instrument: str) -> list[StepState]:
        """Copy of one instrument's steps."""
        return [replace(s) for s in self._row(instrument)]

    def toggle_step(self, instrument: str, index: int) -> bool:
        """
        Flip a step's active flag.

        Returns:
            The new active value

        Raises:
            UnknownInstrument: instrument not active
            OutOfRange: index outside the current cycle
        """
        step = self.step(instrument, index)
        step.active = not step.active
        return step.active

    def set_active(self, instrument: str, index: int, active: bool) -> None:
        """Set a step's active flag explicitly."""
        self.step(instrument, index).active = active

    def set_subdivision(self, instrument: str, index: int, subdivision: int) -> None:
        """
        Set how many sub-triggers a step fires.

        Raises:
            InvalidArgument: subdivision not in 1-4
            UnknownInstrument: instrument not active
            OutOfRange: index outside the current cycle
        """
        if subdivision not in SUBDIVISIONS:
            raise InvalidArgument(
                f"Subdivision must be one of {list(SUBDIVISIONS)}, got {subdivision}"
            )
        self.step(instrument, index).subdivision = subdivision

    def copy(self) -> GridModel:
        """Independent copy (rows, measure and catalog)."""
        clone = GridModel(measure=self._measure, instrument_names=self._names)
        clone._rows = {
            instrument: [replace(s) for s in row] for instrument, row in self._rows.items()
        }
        return clone

    def reset(self) -> None:
        """Clear every step of every instrument back to defaults."""
        for instrument in self._rows:
            self._rows[instrument] = [StepState() for _ in range(self.steps_per_cycle)]

    # ================================================================
    # Serialization (grid files)
    # ================================================================

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the grid file format.

        Only active steps and non-default subdivisions are written.
        """
        instruments: dict[str, Any] = {}
        for instrument, row in self._rows.items():
            instruments[instrument] = {
                "steps": [i for i, s in enumerate(row) if s.active],
                "subdivisions": {
                    str(i): s.subdivision for i, s in enumerate(row) if s.subdivision != 1
                },
            }
        return {"measure": self._measure, "instruments": instruments}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GridModel:
        """
        Create from the grid file format.

        Example:
            >>> grid = GridModel.from_dict({
            ...     "measure": 4,
            ...     "instruments": {"bd": {"steps": [0, 2], "subdivisions": {"2": 4}}},
            ... })
            >>> grid.step("bd", 2).subdivision
            4

        Raises:
            InvalidArgument / OutOfRange: for malformed content
        """
        instruments = data.get("instruments", {})
        if not isinstance(instruments, dict):
            raise InvalidArgument("'instruments' must be a mapping of id -> row")

        grid = cls(measure=int(data.get("measure", DEFAULT_MEASURE)))
        for instrument, row in instruments.items():
            row = row or {}
            if not isinstance(row, dict):
                raise InvalidArgument(
                    f"Row '{instrument}' must be a mapping, got {type(row).__name__}"
                )
            steps = row.get("steps") or []
            if not isinstance(steps, list):
                raise InvalidArgument(f"'{instrument}.steps' must be a list of step indices")
            subdivisions = row.get("subdivisions") or {}
            if not isinstance(subdivisions, dict):
                raise InvalidArgument(f"'{instrument}.subdivisions' must map step index -> 1-4")

            grid.add_instrument(instrument)
            for index in steps:
                grid.set_active(instrument, int(index), True)
            for index, subdivision in subdivisions.items():
                grid.set_subdivision(instrument, int(index), int(subdivision))
        return grid

    # ================================================================
    # Helpers
    # ================================================================

    def _row(self, instrument: str) -> list[StepState]:
        try:
            return self._rows[instrument]
        except KeyError:
            raise UnknownInstrument(f"Instrument '{instrument}' is not on the grid") from None

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.steps_per_cycle:
            raise OutOfRange(
                f"Step index {index} outside 0..{self.steps_per_cycle - 1}"
            )

    @staticmethod
    def _check_measure(measure: int) -> None:
        if measure < MIN_MEASURE:
            raise InvalidArgument(f"Measure must be >= {MIN_MEASURE}, got {measure}")
