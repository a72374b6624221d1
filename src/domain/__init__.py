"""Domain package exposing timeline clip models, parsing, and export helpers."""
from .errors import HapticTimelineError, NoSelectionError, PatternParseError
from .models import DEFAULT_CLIP_SECONDS, MIN_CLIP_SECONDS, Clip, ClipExport, new_clip_id
from .patterns import parse_pattern, pattern_duration_ms
from .timeline import TimelineModel
from .timeline_export import TimelineExporter

__all__ = [
    "Clip",
    "ClipExport",
    "DEFAULT_CLIP_SECONDS",
    "MIN_CLIP_SECONDS",
    "new_clip_id",
    "parse_pattern",
    "pattern_duration_ms",
    "TimelineModel",
    "TimelineExporter",
    "HapticTimelineError",
    "NoSelectionError",
    "PatternParseError",
]
