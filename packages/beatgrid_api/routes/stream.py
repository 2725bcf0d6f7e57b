"""GET /stream - Server-Sent Events of sequencer snapshots"""

import asyncio
import json
import logging
import time
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends
from starlette.responses import StreamingResponse

from beatgrid_loop.ipc import InProcessSnapshotSink

from beatgrid_api.services.sequencer_service import SequencerService, get_sequencer_service

logger = logging.getLogger(__name__)

router = APIRouter()

# Seconds of silence before a heartbeat is sent
_HEARTBEAT_INTERVAL = 15.0

_STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _sse_event(event_type: str, data: object) -> str:
    """One SSE frame: event line, JSON data line, blank line."""
    return f"event: {event_type}\ndata: {json.dumps(data)}\n\n"


async def _event_stream(sink: InProcessSnapshotSink) -> AsyncIterator[str]:
    """
    Frames for one client.

    Order: connected, the latest snapshot (if any), then every snapshot
    published while connected, with heartbeats during silence. The client
    reads its own queue, released when the generator closes.
    """
    queue = sink.subscribe()
    try:
        yield _sse_event("connected", {"timestamp": time.time()})

        if sink.latest is not None:
            yield _sse_event("snapshot", sink.latest.model_dump())

        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=_HEARTBEAT_INTERVAL)
            except asyncio.TimeoutError:
                yield _sse_event("heartbeat", {"timestamp": time.time()})
                continue
            yield _sse_event(event["type"], event["data"])
    finally:
        sink.unsubscribe(queue)
        logger.debug("SSE client disconnected")


@router.get("/stream")
async def stream_events(
    service: SequencerService = Depends(get_sequencer_service),
) -> StreamingResponse:
    """SSE stream of sequencer snapshots.

    Event types:
    - connected: once, on connection
    - snapshot: full state on every mutation and highlight tick
    - heartbeat: keep-alive after 15 s without snapshots
    """
    return StreamingResponse(
        _event_stream(service.get_snapshot_sink()),
        media_type="text/event-stream",
        headers=_STREAM_HEADERS,
    )
