"""
Beatgrid OSC Audio Engine

Sends compiled tracks to an OSC pattern player.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pythonosc import udp_client

if TYPE_CHECKING:
    from beatgrid_core.models.pattern import TrackPattern

logger = logging.getLogger(__name__)


class OscAudioEngine:
    """
    Audio engine that forwards tracks over OSC.

    play() sends a hush, then one message per track to PLAY_ADDRESS with the arguments
    [instrument, pattern, steps_per_cycle, bank, bpm]; the receiving player
    stacks them. stop() sends HUSH_ADDRESS with no arguments.

    Send errors are raised, never swallowed.
    """

    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 57130
    PLAY_ADDRESS = "/beatgrid/play"
    HUSH_ADDRESS = "/beatgrid/hush"

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
        self._host = host
        self._port = port
        self._client: udp_client.SimpleUDPClient | None = None

    def connect(self) -> None:
        """Initialize OSC client"""
        self._client = udp_client.SimpleUDPClient(self._host, self._port)
        logger.info(f"OSC engine connected to {self._host}:{self._port}")

    def disconnect(self) -> None:
        """Close OSC client"""
        self._client = None
        logger.info("OSC engine disconnected")

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def play(self, tracks: list[TrackPattern]) -> None:
        """
        Send every track, replacing whatever the player had.

        Raises:
            ConnectionError: not connected
            OSError: socket send failed
        """
        client = self._require_client()
        client.send_message(self.HUSH_ADDRESS, [])
        for track in tracks:
            client.send_message(
                self.PLAY_ADDRESS,
                [
                    track.instrument,
                    track.pattern.to_pattern_string(),
                    track.steps_per_cycle,
                    track.bank,
                    float(track.bpm),
                ],
            )
        logger.debug(f"Sent {len(tracks)} track(s) to {self._host}:{self._port}")

    def stop(self) -> None:
        """Silence every voice."""
        self._require_client().send_message(self.HUSH_ADDRESS, [])

    def _require_client(self) -> udp_client.SimpleUDPClient:
        if self._client is None:
            raise ConnectionError(f"OSC engine not connected ({self._host}:{self._port})")
        return self._client
