"""Beatgrid HTTP API Server

Step sequencer grid editing, playback control and snapshot streaming.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from beatgrid_api.config import settings
from beatgrid_api.routes import grid, playback, stream
from beatgrid_api.services.sequencer_service import (
    SequencerService,
    get_sequencer_service,
    lifespan,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan_wrapper(app: FastAPI):
    """FastAPI lifespan: create the sequencer, load banks, stop on exit."""
    async with lifespan(settings):
        yield


# Create FastAPI app
app = FastAPI(
    title="Beatgrid API",
    version="0.1.0",
    description="Step sequencer grid and transport HTTP API",
    lifespan=lifespan_wrapper,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(grid.router, prefix="/grid", tags=["grid"])
app.include_router(playback.router, prefix="/playback", tags=["playback"])
app.include_router(stream.router, tags=["stream"])


@app.get("/health")
async def health(service: SequencerService = Depends(get_sequencer_service)):
    """Health check with engine and transport status"""
    controller = service.get_controller()
    engine = controller.engine

    engine_info = {
        "type": type(engine).__name__,
        "connected": getattr(engine, "is_connected", True),
    }
    transport_info = {
        "playing": controller.is_playing,
        "bpm": controller.bpm,
        "bank": controller.bank,
        "current_step": controller.current_step,
    }

    return {
        "status": "healthy" if engine_info["connected"] else "degraded",
        "version": app.version,
        "components": {
            "engine": engine_info,
            "transport": transport_info,
        },
    }


def run(host: str | None = None, port: int | None = None) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "beatgrid_api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
    )


if __name__ == "__main__":
    run()
