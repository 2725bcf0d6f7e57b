"""Audio engine implementations."""

from .osc_engine import OscAudioEngine
from .recording_engine import RecordingAudioEngine

__all__ = ["OscAudioEngine", "RecordingAudioEngine"]
