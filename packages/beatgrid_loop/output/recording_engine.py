"""In-memory audio engine for dry runs (no sound)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from beatgrid_core.models.pattern import stack_to_strudel

if TYPE_CHECKING:
    from beatgrid_core.models.pattern import TrackPattern

logger = logging.getLogger(__name__)


class RecordingAudioEngine:
    """
    Keeps the tracks it was asked to play and logs them as Strudel code.

    Set fail_with to make the next play() raise (simulates an unreachable
    player).
    """

    def __init__(self) -> None:
        self.tracks: list[TrackPattern] = []
        self.playing = False
        self.play_count = 0
        self.fail_with: Exception | None = None

    def play(self, tracks: list[TrackPattern]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.tracks = list(tracks)
        self.playing = True
        self.play_count += 1
        logger.info(f"Dry run play:\n{stack_to_strudel(self.tracks)}")

    def stop(self) -> None:
        self.playing = False
        logger.info("Dry run hush")
