"""Custom exceptions for the Beatgrid sequencer"""


class BeatgridError(Exception):
    """Base exception for all Beatgrid errors"""

    code = "beatgrid_error"


class OutOfRange(BeatgridError):
    """Step index outside the current cycle"""

    code = "out_of_range"


class InvalidArgument(BeatgridError):
    """Intent rejected before reaching the grid (bad subdivision, bpm, measure, bank...)"""

    code = "invalid_argument"


class UnknownInstrument(InvalidArgument):
    """Instrument is not in the active set"""

    code = "unknown_instrument"


class ExternalEngineFailure(BeatgridError):
    """Audio engine raised while starting or stopping playback"""

    code = "engine_failure"


class CatalogUnavailable(BeatgridError):
    """Bank catalog could not be fetched or parsed"""

    code = "catalog_unavailable"
