"""Sequencer state."""

from .grid_model import GridModel
from .transport import TransportState

__all__ = ["GridModel", "TransportState"]
