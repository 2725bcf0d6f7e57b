"""Built-in drum instrument catalog (short code -> display name)."""

from typing import Final

INSTRUMENT_NAMES: Final[dict[str, str]] = {
    "bd": "Bass Drum",
    "sd": "Snare Drum",
    "hh": "Hi-Hat",
    "oh": "Open Hi-Hat",
    "rd": "Ride",
    "lt": "Low Tom",
    "mt": "Mid Tom",
    "ht": "High Tom",
    "cr": "Crash",
    "cp": "Clap",
}

# Rows shown on a fresh grid, top to bottom
DEFAULT_INSTRUMENTS: Final[tuple[str, ...]] = ("hh", "oh", "sd", "bd")
