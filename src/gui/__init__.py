"""Rendering helpers that project editor state into draw commands."""

from .timeline_view import (
    ClipView,
    DrawCommand,
    FillRect,
    FrameLoop,
    Line,
    RoundRect,
    Text,
    TimelineSnapshot,
    grid_ticks,
    render_timeline,
)

__all__ = [
    "ClipView",
    "DrawCommand",
    "FillRect",
    "FrameLoop",
    "Line",
    "RoundRect",
    "Text",
    "TimelineSnapshot",
    "grid_ticks",
    "render_timeline",
]
