"""
Beatgrid Protocols

Abstract interfaces for the sequencer's external collaborators.
Uses typing.Protocol for structural subtyping (duck typing), so test
doubles need no base class.
"""

from .audio import AudioEngine
from .catalog import BankCatalog
from .clock import ClockSource
from .sink import SnapshotSink

__all__ = [
    "AudioEngine",
    "BankCatalog",
    "ClockSource",
    "SnapshotSink",
]
