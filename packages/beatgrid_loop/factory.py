"""
Beatgrid Loop Factory

Factory functions for creating production SequencerController instances.
Separates object creation from business logic (DI pattern).
"""

from __future__ import annotations

from beatgrid_core.constants import DEFAULT_BANK, DEFAULT_CATALOG_URL
from beatgrid_core.protocols import AudioEngine, BankCatalog, SnapshotSink

from .catalog import HttpBankCatalog, StaticBankCatalog
from .engine import MonotonicClock, SequencerController
from .output import OscAudioEngine, RecordingAudioEngine


def create_sequencer(
    osc_host: str = OscAudioEngine.DEFAULT_HOST,
    osc_port: int = OscAudioEngine.DEFAULT_PORT,
    catalog_url: str | None = DEFAULT_CATALOG_URL,
    catalog_timeout: float = 10.0,
    bpm: float = 60.0,
    bank: str = DEFAULT_BANK,
    dry_run: bool = False,
    sink: SnapshotSink | None = None,
) -> SequencerController:
    """
    Create a production SequencerController with real I/O dependencies.

    Args:
        osc_host: OSC pattern player host
        osc_port: OSC pattern player port
        catalog_url: Sample map URL (None for the built-in bank list)
        catalog_timeout: Catalog request timeout in seconds
        bpm: Initial tempo
        bank: Initial sample bank
        dry_run: Use RecordingAudioEngine instead of OSC
        sink: Snapshot sink for renderers

    Returns:
        Configured SequencerController (call await init() before use)
    """
    engine: AudioEngine
    if dry_run:
        engine = RecordingAudioEngine()
    else:
        osc = OscAudioEngine(osc_host, osc_port)
        osc.connect()
        engine = osc

    catalog: BankCatalog
    if catalog_url:
        catalog = HttpBankCatalog(catalog_url, timeout=catalog_timeout)
    else:
        catalog = StaticBankCatalog()

    return SequencerController(
        engine=engine,
        catalog=catalog,
        clock=MonotonicClock(),
        sink=sink,
        bpm=bpm,
        bank=bank,
    )
