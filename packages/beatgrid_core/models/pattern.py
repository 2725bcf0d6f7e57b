"""Compiled pattern models.

These are what the audio engine receives: one TrackPattern per instrument,
passed by value on every play.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Any

# Rest sentinel understood by the pattern engine (track stays reserved)
REST = "-"


def format_position(position: Fraction | int) -> str:
    """
    Render a beat position the way the pattern engine parses numbers.

    Integral positions render as integers ("2"), fractional ones as the
    shortest float text ("2.25", "2.3333333333333335").
    """
    value = Fraction(position)
    if value.denominator == 1:
        return str(value.numerator)
    return repr(float(value))


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True, slots=True)
class BeatPattern:
    """
    Beat-pattern descriptor for one instrument.

    positions holds ascending fractional beat positions within the cycle.
    An empty tuple means the instrument rests for the whole cycle; it is
    rendered as the REST sentinel, never as an empty string.

    Example:
        >>> BeatPattern((Fraction(0), Fraction(2), Fraction(9, 4))).to_pattern_string()
        '0,2,2.25'
    """

    positions: tuple[Fraction, ...] = ()

    @property
    def is_rest(self) -> bool:
        return not self.positions

    def to_pattern_string(self) -> str:
        """Comma-joined positions, or REST."""
        if self.is_rest:
            return REST
        return ",".join(format_position(p) for p in self.positions)

    def __str__(self) -> str:
        return self.to_pattern_string()


@dataclass(frozen=True, slots=True)
class TrackPattern:
    """Everything the engine needs to play one instrument track."""

    instrument: str
    pattern: BeatPattern
    steps_per_cycle: int
    bank: str
    bpm: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (for JSON serialization)."""
        return {
            "instrument": self.instrument,
            "pattern": self.pattern.to_pattern_string(),
            "steps_per_cycle": self.steps_per_cycle,
            "bank": self.bank,
            "bpm": self.bpm,
        }

    def to_strudel(self) -> str:
        """
        Render as a Strudel expression.

        Example:
            s("bd").beat("0,4,8,12", 16).bank("RolandTR909").cpm(120)
        """
        return (
            f's("{self.instrument}")'
            f'.beat("{self.pattern.to_pattern_string()}", {self.steps_per_cycle})'
            f'.bank("{self.bank}")'
            f".cpm({_format_number(self.bpm)})"
        )


def stack_to_strudel(tracks: list[TrackPattern]) -> str:
    """Render all tracks as one stacked Strudel expression."""
    if not tracks:
        return "silence"
    body = ",\n  ".join(track.to_strudel() for track in tracks)
    return f"stack(\n  {body}\n)"
