from .steps import (
    DEFAULT_MEASURE,
    MIN_MEASURE,
    STEPS_PER_BEAT,
    SUBDIVISIONS,
    TRIPLE_MEASURE_DIVISOR,
    DEFAULT_DIVISOR,
    MAX_POLL_INTERVAL_MS,
)
from .instruments import DEFAULT_INSTRUMENTS, INSTRUMENT_NAMES
from .banks import DEFAULT_BANK, FALLBACK_BANKS, DEFAULT_CATALOG_URL

__all__ = [
    "DEFAULT_MEASURE",
    "MIN_MEASURE",
    "STEPS_PER_BEAT",
    "SUBDIVISIONS",
    "TRIPLE_MEASURE_DIVISOR",
    "DEFAULT_DIVISOR",
    "MAX_POLL_INTERVAL_MS",
    "DEFAULT_INSTRUMENTS",
    "INSTRUMENT_NAMES",
    "DEFAULT_BANK",
    "FALLBACK_BANKS",
    "DEFAULT_CATALOG_URL",
]
