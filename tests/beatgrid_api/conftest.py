"""Test fixtures for beatgrid_api tests"""

from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

import beatgrid_api.main as main_module
from beatgrid_api.main import app
from beatgrid_api.services.sequencer_service import SequencerService, set_sequencer_service
from beatgrid_loop.catalog import StaticBankCatalog
from beatgrid_loop.engine import SequencerController
from beatgrid_loop.ipc import InProcessSnapshotSink
from beatgrid_loop.output import RecordingAudioEngine

from ..beatgrid_loop.mocks import FakeClock


@pytest.fixture
def engine() -> RecordingAudioEngine:
    return RecordingAudioEngine()


@pytest.fixture
def sink() -> InProcessSnapshotSink:
    return InProcessSnapshotSink()


@pytest.fixture
def controller(engine: RecordingAudioEngine, sink: InProcessSnapshotSink) -> SequencerController:
    """Real controller on a dry-run engine, offline catalog and frozen clock"""
    return SequencerController(
        engine=engine,
        catalog=StaticBankCatalog(["LinnDrum", "RolandTR808", "RolandTR909"]),
        clock=FakeClock(),
        sink=sink,
    )


@pytest.fixture
def service(controller: SequencerController, sink: InProcessSnapshotSink) -> SequencerService:
    return SequencerService(controller=controller, sink=sink)


@pytest.fixture
def client(service: SequencerService, monkeypatch):
    """Test client whose lifespan installs the test service instead of OSC"""

    @asynccontextmanager
    async def test_lifespan(settings):
        set_sequencer_service(service)
        controller = service.get_controller()
        await controller.init()
        try:
            yield
        finally:
            controller.stop()
            set_sequencer_service(None)

    monkeypatch.setattr(main_module, "lifespan", test_lifespan)

    with TestClient(app) as test_client:
        yield test_client
