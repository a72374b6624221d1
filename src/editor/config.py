"""Runtime configuration for the timeline editor."""
from __future__ import annotations

from dataclasses import dataclass, field

from domain.models import DEFAULT_CLIP_SECONDS, MIN_CLIP_SECONDS


@dataclass(frozen=True)
class TrackGeometry:
    """Vertical layout of the single clip track in surface pixels."""

    top_pad: float = 22.0
    track_y: float = 60.0
    track_h: float = 60.0
    clip_inset: float = 10.0
    right_margin: float = 12.0

    def __post_init__(self) -> None:
        if self.track_h <= 2 * self.clip_inset:
            raise ValueError("track_h must leave room for the clip inset")

    @property
    def clip_top(self) -> float:
        return self.track_y + self.clip_inset

    @property
    def clip_bottom(self) -> float:
        return self.track_y + self.track_h - self.clip_inset


@dataclass
class EditorConfig:
    """Tunable constants shared by the editor components."""

    snap_enabled: bool = True
    snap_step: float = 0.1
    default_clip_seconds: float = DEFAULT_CLIP_SECONDS
    min_clip_seconds: float = MIN_CLIP_SECONDS
    resize_handle_px: float = 10.0
    trigger_tolerance: float = 0.06
    debounce_seconds: float = 0.2
    fallback_duration: float = 30.0
    px_per_sec: float = 180.0
    min_px_per_sec: float = 60.0
    max_px_per_sec: float = 600.0
    zoom_factor: float = 1.25
    left_pad: float = 60.0
    arm_test_pulse_ms: int = 10
    geometry: TrackGeometry = field(default_factory=TrackGeometry)

    def __post_init__(self) -> None:
        for name in ("snap_step", "default_clip_seconds", "fallback_duration", "min_px_per_sec"):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be positive")
        if self.max_px_per_sec < self.min_px_per_sec:
            raise ValueError("max_px_per_sec must not be below min_px_per_sec")
        if self.zoom_factor <= 1.0:
            raise ValueError("zoom_factor must be greater than 1")
        if self.trigger_tolerance < 0.0 or self.debounce_seconds < 0.0:
            raise ValueError("trigger tolerances must be non-negative")


__all__ = ["EditorConfig", "TrackGeometry"]
