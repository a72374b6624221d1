"""Fire clip patterns as the playback position crosses their start times."""
from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import List

from domain.models import Clip
from domain.timeline import TimelineModel

from .capabilities import PulseInput

logger = logging.getLogger(__name__)


def _normalise_position(position: float | None) -> float:
    if position is None or not math.isfinite(position):
        return 0.0
    return float(position)


class PlaybackTrigger:
    """Crossing detector with per-clip debounce.

    Position updates arrive at an irregular cadence and may jump backwards
    when the user scrubs. The trigger keeps a watermark of the last seen
    position and fires every clip whose start lies between the watermark
    and the new position, widened by ``tolerance`` on both ends. A clip
    that already fired for its current start time is skipped until a
    rewind takes the playhead back before it.
    """

    def __init__(
        self,
        model: TimelineModel,
        fire: Callable[[PulseInput], object],
        *,
        tolerance: float = 0.06,
        debounce_seconds: float = 0.2,
    ) -> None:
        if tolerance < 0.0 or debounce_seconds < 0.0:
            raise ValueError("tolerance and debounce_seconds must be non-negative")
        self._model = model
        self._fire = fire
        self._tolerance = float(tolerance)
        self._debounce = float(debounce_seconds)
        self._watermark = 0.0
        self._fired_total = 0
        self._fire_callbacks: List[Callable[[Clip, float], None]] = []

    @property
    def watermark(self) -> float:
        return self._watermark

    @property
    def fired_total(self) -> int:
        """Return how many patterns fired since construction."""

        return self._fired_total

    def add_fire_callback(self, callback: Callable[[Clip, float], None]) -> None:
        """Register a function invoked with each fired clip and the position."""

        self._fire_callbacks.append(callback)

    def reset(self, position: float | None = 0.0) -> None:
        """Re-seat the watermark without firing anything."""

        self._watermark = _normalise_position(position)
        self._clear_debounce_after(self._watermark)

    def on_position(self, position: float | None) -> List[Clip]:
        """Process one playback-position update and return the clips fired."""

        t = _normalise_position(position)
        if t < self._watermark:
            logger.debug("Rewind detected: %.3fs -> %.3fs", self._watermark, t)
            self._watermark = t
            self._clear_debounce_after(t)

        low = self._watermark - self._tolerance
        high = t + self._tolerance
        fired: List[Clip] = []
        for clip in self._model.clips:
            if not clip.pattern:
                continue
            if not low <= clip.t0 <= high:
                continue
            if not self._debounce_elapsed(clip):
                continue
            clip.fired_at = clip.t0
            self._fire(list(clip.pattern))
            fired.append(clip)
            for callback in self._fire_callbacks:
                callback(clip, t)
            logger.debug("Fired clip %s at %.3fs (position %.3fs)", clip.id, clip.t0, t)

        self._fired_total += len(fired)
        self._watermark = t
        return fired

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _debounce_elapsed(self, clip: Clip) -> bool:
        if clip.fired_at is None:
            return True
        return abs(clip.fired_at - clip.t0) > self._debounce

    def _clear_debounce_after(self, position: float) -> None:
        for clip in self._model.clips:
            if clip.fired_at is not None and clip.t0 > position + self._tolerance:
                clip.fired_at = None


__all__ = ["PlaybackTrigger"]
