"""Sequencer service - bridge between HTTP API and the sequencer controller"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from beatgrid_core.exceptions import ExternalEngineFailure
from beatgrid_loop.engine import SequencerController
from beatgrid_loop.factory import create_sequencer
from beatgrid_loop.ipc import InProcessSnapshotSink

from beatgrid_api.config import Settings

logger = logging.getLogger(__name__)


# Global instance (managed by lifespan)
_sequencer_service: "SequencerService | None" = None


class SequencerService:
    """Owns the controller and its snapshot sink for the app's lifetime"""

    def __init__(
        self,
        controller: SequencerController | None = None,
        sink: InProcessSnapshotSink | None = None,
    ) -> None:
        self._controller = controller
        self._sink = sink

    def initialize(self, settings: Settings) -> None:
        """
        Create the controller with in-process snapshot delivery.

        Args:
            settings: Application settings
        """
        if self._controller is not None:
            return

        self._sink = InProcessSnapshotSink()
        self._controller = create_sequencer(
            osc_host=settings.osc_host,
            osc_port=settings.osc_port,
            catalog_url=settings.catalog_url or None,
            catalog_timeout=settings.catalog_timeout,
            bpm=settings.default_bpm,
            bank=settings.default_bank,
            dry_run=settings.dry_run,
            sink=self._sink,
        )

    def get_controller(self) -> SequencerController:
        """Get the sequencer controller"""
        if self._controller is None:
            raise RuntimeError("Sequencer not initialized. Call initialize() first.")
        return self._controller

    def get_snapshot_sink(self) -> InProcessSnapshotSink:
        """Get the snapshot sink (for SSE endpoint)"""
        if self._sink is None:
            raise RuntimeError("Sequencer not initialized. Call initialize() first.")
        return self._sink


def get_sequencer_service() -> SequencerService:
    """
    FastAPI dependency to get the SequencerService instance.

    Raises:
        RuntimeError: If service is not initialized
    """
    if _sequencer_service is None:
        raise RuntimeError("SequencerService not initialized. Ensure app lifespan is running.")
    return _sequencer_service


def set_sequencer_service(service: "SequencerService | None") -> None:
    """Install a service instance (lifespan and tests)."""
    global _sequencer_service
    _sequencer_service = service


@asynccontextmanager
async def lifespan(settings: Settings) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI.

    Creates the controller, loads the bank catalog, and stops playback on
    shutdown.
    """
    service = SequencerService()
    service.initialize(settings)
    set_sequencer_service(service)

    controller = service.get_controller()
    await controller.init()
    logger.info("Sequencer ready")

    try:
        yield
    finally:
        try:
            controller.stop()
        except ExternalEngineFailure as e:
            logger.warning(f"Engine did not stop cleanly: {e}")
        set_sequencer_service(None)
        logger.info("Sequencer shut down")
