"""
Pydantic models for intent validation.

Each renderer intent has a model that validates its payload before the
grid is touched. Validation failures surface as InvalidArgument.
"""

from pydantic import BaseModel, Field

from beatgrid_core.constants import MIN_MEASURE


class InstrumentCommand(BaseModel):
    """
    Add/remove instrument payload.

    Fields:
        instrument: Instrument short code (e.g. "bd")
    """

    instrument: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_-]+$")


class ToggleStepCommand(BaseModel):
    """
    Toggle step payload.

    Fields:
        instrument: Instrument short code
        index: Step index (range checked against the current cycle later)
    """

    instrument: str = Field(min_length=1)
    index: int


class SubdivisionCommand(BaseModel):
    """
    Set subdivision payload.

    Fields:
        instrument: Instrument short code
        index: Step index
        subdivision: Sub-triggers per step (1-4)
    """

    instrument: str = Field(min_length=1)
    index: int
    subdivision: int = Field(ge=1, le=4)


class TempoCommand(BaseModel):
    """
    Tempo change payload.

    Fields:
        bpm: Beats per minute (positive and finite)
    """

    bpm: float = Field(gt=0, allow_inf_nan=False)


class MeasureCommand(BaseModel):
    """
    Measure change payload.

    Fields:
        measure: Beats per cycle (3 or more)
    """

    measure: int = Field(ge=MIN_MEASURE)


class BankCommand(BaseModel):
    """
    Bank change payload.

    Fields:
        bank: Sample bank name (must be in the active bank list)
    """

    bank: str = Field(min_length=1)


class PlayCommand(BaseModel):
    """Play command payload (empty)."""

    pass


class StopCommand(BaseModel):
    """Stop command payload (empty)."""

    pass


class ResetCommand(BaseModel):
    """Reset grid payload (empty)."""

    pass
