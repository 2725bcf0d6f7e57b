"""Snapshot sink protocol (sequencer -> renderer)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from beatgrid_core.models.snapshot import SequencerSnapshot


@runtime_checkable
class SnapshotSink(Protocol):
    """
    Receives the observable sequencer state.

    Called on every scheduler tick and every state mutation. Must not
    block; the controller calls it synchronously.

    Implementations:
        - InProcessSnapshotSink: asyncio.Queue for the SSE endpoint
        - MockSnapshotSink: test double recording every snapshot
    """

    def publish(self, snapshot: SequencerSnapshot) -> None:
        """Deliver a snapshot."""
        ...
