"""
Pytest fixtures for beatgrid_loop tests.

Provides mock collaborators and a controller wired to them.
"""

from __future__ import annotations

import pytest

from beatgrid_loop.engine import SequencerController
from beatgrid_loop.state import GridModel

from .mocks import FakeClock, MockAudioEngine, MockBankCatalog, MockSnapshotSink


@pytest.fixture
def clock() -> FakeClock:
    """Create a FakeClock starting at t=1000ms."""
    return FakeClock()


@pytest.fixture
def mock_engine() -> MockAudioEngine:
    """Create a fresh MockAudioEngine for testing."""
    return MockAudioEngine()


@pytest.fixture
def mock_sink() -> MockSnapshotSink:
    """Create a fresh MockSnapshotSink for testing."""
    return MockSnapshotSink()


@pytest.fixture
def mock_catalog() -> MockBankCatalog:
    """Catalog offering two banks."""
    return MockBankCatalog(banks=["LinnDrum", "RolandTR909"])


@pytest.fixture
def controller(
    mock_engine: MockAudioEngine,
    mock_catalog: MockBankCatalog,
    clock: FakeClock,
    mock_sink: MockSnapshotSink,
) -> SequencerController:
    """
    Create a SequencerController with all mock dependencies.

    Default rows (hh, oh, sd, bd), 4/4, 60 BPM, RolandTR909.
    """
    return SequencerController(
        engine=mock_engine,
        catalog=mock_catalog,
        clock=clock,
        sink=mock_sink,
    )


@pytest.fixture
def grid() -> GridModel:
    """4/4 grid with kick and snare rows."""
    return GridModel(["bd", "sd"])
