"""Sample bank constants."""

from typing import Final

DEFAULT_BANK: Final[str] = "RolandTR909"

# Used when the remote catalog is empty or unreachable
FALLBACK_BANKS: Final[tuple[str, ...]] = (
    "RolandTR909",
    "RolandTR808",
    "RolandTR606",
    "RolandCR78",
    "LinnDrum",
    "OberheimDMX",
    "YamahaRX5",
)

DEFAULT_CATALOG_URL: Final[str] = (
    "https://raw.githubusercontent.com/felixroos/dough-samples/main/"
    "tidal-drum-machines.json"
)
