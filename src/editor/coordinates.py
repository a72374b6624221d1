"""Time/pixel mapping and grid snapping for the timeline surface."""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class CoordinateMapper:
    """Map playback seconds to horizontal surface pixels and back."""

    px_per_sec: float = 180.0
    left_pad: float = 60.0
    min_px_per_sec: float = 60.0
    max_px_per_sec: float = 600.0
    zoom_factor: float = 1.25

    def __post_init__(self) -> None:
        self.px_per_sec = self.clamp_zoom(self.px_per_sec)

    def clamp_zoom(self, value: float) -> float:
        """Ensure *value* stays within the zoom bounds."""

        return min(self.max_px_per_sec, max(self.min_px_per_sec, float(value)))

    def time_to_x(self, seconds: float) -> float:
        return self.left_pad + seconds * self.px_per_sec

    def x_to_time(self, x: float) -> float:
        return (x - self.left_pad) / self.px_per_sec

    def dx_to_seconds(self, dx: float) -> float:
        return dx / self.px_per_sec

    def set_zoom(self, px_per_sec: float) -> float:
        self.px_per_sec = self.clamp_zoom(px_per_sec)
        return self.px_per_sec

    def zoom_in(self) -> float:
        return self.set_zoom(self.px_per_sec * self.zoom_factor)

    def zoom_out(self) -> float:
        return self.set_zoom(self.px_per_sec / self.zoom_factor)


@dataclass
class Snapper:
    """Optional quantisation of time values to a fixed grid."""

    enabled: bool = True
    step: float = 0.1

    def __post_init__(self) -> None:
        if self.step <= 0.0:
            raise ValueError("step must be positive")

    def snap(self, seconds: float) -> float:
        """Round half-up to the nearest grid step, or pass through when disabled."""

        if not self.enabled:
            return seconds
        # Rounded to drop binary noise such as 0.30000000000000004.
        return round(math.floor(seconds / self.step + 0.5) * self.step, 9)


__all__ = ["CoordinateMapper", "Snapper"]
