"""API routers."""

from . import grid, playback, stream

__all__ = ["grid", "playback", "stream"]
