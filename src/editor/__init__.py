"""Timeline editing: pointer interaction, playback triggering, and the editor context."""

from .capabilities import (
    Actuator,
    HapticGate,
    HapticStatus,
    ManualPlaybackClock,
    PlaybackClock,
    RecordingActuator,
    effective_duration,
)
from .config import EditorConfig, TrackGeometry
from .context import EditorContext
from .coordinates import CoordinateMapper, Snapper
from .interaction import (
    DragMode,
    DragSession,
    InteractionController,
    InteractionState,
    PointerEvent,
    SurfaceBounds,
)
from .playback_trigger import PlaybackTrigger

__all__ = [
    "Actuator",
    "HapticGate",
    "HapticStatus",
    "ManualPlaybackClock",
    "PlaybackClock",
    "RecordingActuator",
    "effective_duration",
    "EditorConfig",
    "TrackGeometry",
    "EditorContext",
    "CoordinateMapper",
    "Snapper",
    "DragMode",
    "DragSession",
    "InteractionController",
    "InteractionState",
    "PointerEvent",
    "SurfaceBounds",
    "PlaybackTrigger",
]
