"""FastAPI dependencies and result mapping for Beatgrid API."""

from typing import Any

from fastapi import Depends, HTTPException

from beatgrid_loop.engine import SequencerController
from beatgrid_loop.result import CommandResult

from beatgrid_api.services.sequencer_service import SequencerService, get_sequencer_service

# BeatgridError code -> HTTP status
_STATUS_BY_CODE: dict[str, int] = {
    "out_of_range": 400,
    "unknown_command": 400,
    "invalid_argument": 422,
    "unknown_instrument": 404,
    "engine_failure": 502,
}


def get_controller(
    service: SequencerService = Depends(get_sequencer_service),
) -> SequencerController:
    """
    Dependency to get the sequencer controller.

    Usage:
        @router.post("/start")
        async def start(controller: SequencerController = Depends(get_controller)):
            ...
    """
    return service.get_controller()


def unwrap(result: CommandResult) -> dict[str, Any]:
    """
    Turn a CommandResult into a response body or an HTTPException.

    Raises:
        HTTPException: with the status mapped from the error code
    """
    if not result.success:
        status = _STATUS_BY_CODE.get(result.code or "", 500)
        raise HTTPException(
            status_code=status,
            detail={"code": result.code, "message": result.message},
        )
    return {"status": "ok", "snapshot": result.data}
