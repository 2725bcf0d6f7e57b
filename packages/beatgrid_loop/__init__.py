"""
Beatgrid Loop

Step grid, pattern compiler, highlight clock and sequencer controller.
"""

__version__ = "0.1.0"

from .engine import PatternCompiler, SequencerController, TransportScheduler
from .factory import create_sequencer
from .result import CommandResult
from .state import GridModel

__all__ = [
    "create_sequencer",
    "CommandResult",
    "GridModel",
    "PatternCompiler",
    "SequencerController",
    "TransportScheduler",
]
