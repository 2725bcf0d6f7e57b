"""GET/POST /grid/* - Grid editing endpoints"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from beatgrid_core.models.snapshot import SequencerSnapshot
from beatgrid_loop.engine import SequencerController

from beatgrid_api.dependencies import get_controller, unwrap

logger = logging.getLogger(__name__)

router = APIRouter()


class InstrumentRequest(BaseModel):
    """Request to add an instrument row"""

    instrument: str = Field(..., description="Instrument short code (e.g. 'bd')")


class StepRequest(BaseModel):
    """Request addressing one step"""

    instrument: str
    index: int = Field(..., description="Step index within the cycle")


class SubdivisionRequest(StepRequest):
    """Request to subdivide one step"""

    subdivision: int = Field(..., description="Sub-triggers per step (1-4)")


class MeasureRequest(BaseModel):
    """Request to change beats per cycle"""

    measure: int


class AvailableInstrumentsResponse(BaseModel):
    """Catalog instruments that can still be added"""

    instruments: list[dict[str, str]]


@router.get("", response_model=SequencerSnapshot)
async def get_grid(
    controller: SequencerController = Depends(get_controller),
) -> SequencerSnapshot:
    """Current sequencer snapshot"""
    return controller.snapshot()


@router.get("/instruments/available", response_model=AvailableInstrumentsResponse)
async def available_instruments(
    controller: SequencerController = Depends(get_controller),
) -> AvailableInstrumentsResponse:
    """Instruments from the built-in catalog not yet on the grid"""
    grid = controller.grid
    return AvailableInstrumentsResponse(
        instruments=[
            {"id": code, "name": grid.display_name(code)} for code in grid.available_to_add()
        ]
    )


@router.post("/instruments")
async def add_instrument(
    req: InstrumentRequest,
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Add an instrument row (no-op if already present)"""
    return unwrap(controller.dispatch("add_instrument", req.model_dump()))


@router.delete("/instruments/{instrument}")
async def remove_instrument(
    instrument: str,
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Remove an instrument row and its step data"""
    return unwrap(controller.dispatch("remove_instrument", {"instrument": instrument}))


@router.post("/steps/toggle")
async def toggle_step(
    req: StepRequest,
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Toggle one step on/off"""
    return unwrap(controller.dispatch("toggle_step", req.model_dump()))


@router.post("/steps/subdivision")
async def set_subdivision(
    req: SubdivisionRequest,
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Set one step's subdivision"""
    return unwrap(controller.dispatch("set_subdivision", req.model_dump()))


@router.post("/measure")
async def update_measure(
    req: MeasureRequest,
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Change beats per cycle"""
    return unwrap(controller.dispatch("update_measure", req.model_dump()))


@router.post("/reset")
async def reset_grid(
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Clear every step"""
    return unwrap(controller.dispatch("reset"))
