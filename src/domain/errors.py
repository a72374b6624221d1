"""Error hierarchy shared by the timeline domain and the editor layer."""
from __future__ import annotations


class HapticTimelineError(Exception):
    """Base error for recoverable timeline editing failures."""


class PatternParseError(HapticTimelineError, ValueError):
    """Raised when pattern text is empty, malformed, or has no usable durations."""


class NoSelectionError(HapticTimelineError):
    """Raised when an action needs a selected clip and none is available."""


__all__ = ["HapticTimelineError", "PatternParseError", "NoSelectionError"]
