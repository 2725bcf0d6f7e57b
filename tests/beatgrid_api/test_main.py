"""Tests for main app endpoints and service wiring"""

import pytest
from fastapi.testclient import TestClient

from beatgrid_api.config import Settings
from beatgrid_api.services.sequencer_service import (
    SequencerService,
    get_sequencer_service,
    set_sequencer_service,
)
from beatgrid_loop.output import RecordingAudioEngine


def test_health_check(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["components"]["engine"]["type"] == "RecordingAudioEngine"
    assert data["components"]["transport"]["playing"] is False


def test_service_not_initialized():
    set_sequencer_service(None)

    with pytest.raises(RuntimeError):
        get_sequencer_service()

    with pytest.raises(RuntimeError):
        SequencerService().get_controller()


def test_service_initialize_dry_run():
    service = SequencerService()
    service.initialize(Settings(dry_run=True, catalog_url="", default_bpm=90))

    controller = service.get_controller()
    assert isinstance(controller.engine, RecordingAudioEngine)
    assert controller.bpm == 90
    assert service.get_snapshot_sink() is not None


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("BEATGRID_OSC_PORT", "9001")
    monkeypatch.setenv("BEATGRID_DRY_RUN", "true")

    settings = Settings()

    assert settings.osc_port == 9001
    assert settings.dry_run is True
