"""
In-Process snapshot delivery.

The controller publishes snapshots synchronously; this sink fans them out
to one queue per SSE client on the same event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from beatgrid_core.models.snapshot import SequencerSnapshot

logger = logging.getLogger(__name__)

# Per-subscriber queue size (drop-oldest when full)
_DEFAULT_QUEUE_SIZE = 64


class InProcessSnapshotSink:
    """SnapshotSink that broadcasts to subscriber queues.

    Each SSE client calls subscribe() and reads its own asyncio.Queue, so
    every client sees every snapshot. A full queue drops its oldest entry.
    Publishing with no subscribers only updates latest.
    """

    def __init__(self, maxsize: int = _DEFAULT_QUEUE_SIZE) -> None:
        self._maxsize = maxsize
        self._subscribers: list[asyncio.Queue[dict[str, Any]]] = []
        self._latest: SequencerSnapshot | None = None

    @property
    def latest(self) -> SequencerSnapshot | None:
        """Most recently published snapshot."""
        return self._latest

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue[dict[str, Any]]:
        """Register a new client queue; pair with unsubscribe()."""
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self._maxsize)
        self._subscribers.append(queue)
        logger.debug(f"Snapshot subscriber added ({len(self._subscribers)} total)")
        return queue

    def unsubscribe(self, queue: asyncio.Queue[dict[str, Any]]) -> None:
        """Drop a client queue. Unknown queues are ignored."""
        if queue in self._subscribers:
            self._subscribers.remove(queue)
            logger.debug(f"Snapshot subscriber removed ({len(self._subscribers)} left)")

    def publish(self, snapshot: SequencerSnapshot) -> None:
        """Queue a snapshot event for every subscriber."""
        self._latest = snapshot
        if not self._subscribers:
            return
        event = {"type": "snapshot", "data": snapshot.model_dump()}
        for queue in self._subscribers:
            self._push(queue, event)

    @staticmethod
    def _push(queue: asyncio.Queue[dict[str, Any]], event: dict[str, Any]) -> None:
        if queue.full():
            queue.get_nowait()
        queue.put_nowait(event)
