"""Snapshot delivery to renderers."""

from .in_process import InProcessSnapshotSink

__all__ = ["InProcessSnapshotSink"]
