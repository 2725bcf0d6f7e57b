"""Audio engine protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from beatgrid_core.models.pattern import TrackPattern


@runtime_checkable
class AudioEngine(Protocol):
    """
    External pattern player.

    Receives compiled tracks by value on every play and owns all sound
    scheduling. It keeps no reference to sequencer state.

    Implementations:
        - OscAudioEngine: sends tracks over OSC via python-osc
        - RecordingAudioEngine: in-memory engine for dry runs
        - MockAudioEngine: test double for unit tests
    """

    def play(self, tracks: list[TrackPattern]) -> None:
        """
        Play all tracks stacked, replacing whatever was playing.

        Raises:
            Exception: any failure; the controller wraps it
        """
        ...

    def stop(self) -> None:
        """Silence every voice."""
        ...
