"""GET/POST /playback/* - Playback control endpoints"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from beatgrid_core.models.pattern import stack_to_strudel
from beatgrid_loop.engine import SequencerController

from beatgrid_api.dependencies import get_controller, unwrap

logger = logging.getLogger(__name__)

router = APIRouter()


class TempoRequest(BaseModel):
    """Request to change tempo"""

    bpm: float


class BankRequest(BaseModel):
    """Request to change sample bank"""

    bank: str


class BanksResponse(BaseModel):
    """Active bank list"""

    banks: list[str]
    current: str


class PatternsResponse(BaseModel):
    """Compiled tracks for the current grid"""

    tracks: list[dict]
    strudel: str


@router.post("/start")
async def start_playback(
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Start playback (restarts if already playing)"""
    return unwrap(controller.dispatch("play"))


@router.post("/stop")
async def stop_playback(
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Stop playback and clear the highlight"""
    return unwrap(controller.dispatch("stop"))


@router.post("/tempo")
async def update_tempo(
    req: TempoRequest,
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Change tempo (BPM must be positive)"""
    return unwrap(controller.dispatch("update_tempo", req.model_dump()))


@router.post("/bank")
async def update_bank(
    req: BankRequest,
    controller: SequencerController = Depends(get_controller),
) -> dict:
    """Change sample bank (must be in the active bank list)"""
    return unwrap(controller.dispatch("update_bank", req.model_dump()))


@router.get("/banks", response_model=BanksResponse)
async def list_banks(
    controller: SequencerController = Depends(get_controller),
) -> BanksResponse:
    """Active bank list and current bank"""
    return BanksResponse(banks=controller.banks, current=controller.bank)


@router.get("/patterns", response_model=PatternsResponse)
async def compiled_patterns(
    controller: SequencerController = Depends(get_controller),
) -> PatternsResponse:
    """Compile the grid without playing it"""
    tracks = controller.compile_tracks()
    return PatternsResponse(
        tracks=[track.to_dict() for track in tracks],
        strudel=stack_to_strudel(tracks),
    )
