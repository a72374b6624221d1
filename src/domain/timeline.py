"""In-memory owner of timeline clips and the current selection."""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence

from .models import MIN_CLIP_SECONDS, Clip

logger = logging.getLogger(__name__)


class TimelineModel:
    """Insertion-ordered clip collection with a weak selection reference.

    The selection is stored as a clip id only; removing the clip it points
    at clears it. Mutators refuse values that would break the clip
    invariants and leave the model untouched when they do.
    """

    def __init__(self, clips: Sequence[Clip] | None = None) -> None:
        self._clips: Dict[str, Clip] = {}
        self._selected_id: str | None = None
        for clip in clips or ():
            self.add(clip)

    def __len__(self) -> int:
        return len(self._clips)

    def __iter__(self) -> Iterator[Clip]:
        return iter(list(self._clips.values()))

    def __contains__(self, clip_id: object) -> bool:
        return clip_id in self._clips

    @property
    def clips(self) -> List[Clip]:
        """Return the clips in insertion order."""

        return list(self._clips.values())

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected(self) -> Clip | None:
        """Return the selected clip, if any."""

        if self._selected_id is None:
            return None
        return self._clips.get(self._selected_id)

    def add(self, clip: Clip) -> Clip:
        if clip.id in self._clips:
            raise ValueError(f"Clip {clip.id!r} already exists")
        self._clips[clip.id] = clip
        logger.debug("Added clip %s at %.3fs", clip.id, clip.t0)
        return clip

    def remove(self, clip_id: str) -> Clip | None:
        """Remove a clip, clearing the selection when it pointed at it."""

        clip = self._clips.pop(clip_id, None)
        if clip is not None:
            logger.debug("Removed clip %s", clip_id)
        if self._selected_id == clip_id:
            self._selected_id = None
        return clip

    def find(self, clip_id: str | None) -> Clip | None:
        if clip_id is None:
            return None
        return self._clips.get(clip_id)

    def list_sorted_by_start(self) -> List[Clip]:
        """Return clips ordered by start time, ties kept in insertion order."""

        return sorted(self._clips.values(), key=lambda clip: clip.t0)

    def iter_topmost(self) -> Iterator[Clip]:
        """Yield clips from most recently added to least recently added."""

        return reversed(list(self._clips.values()))

    def select(self, clip_id: str | None) -> Clip | None:
        """Select ``clip_id`` or clear the selection with ``None``."""

        if clip_id is None:
            self._selected_id = None
            return None
        if clip_id not in self._clips:
            raise KeyError(f"Clip {clip_id!r} not found")
        self._selected_id = clip_id
        return self._clips[clip_id]

    def clear(self) -> None:
        """Drop every clip and the selection."""

        self._clips.clear()
        self._selected_id = None

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def move(self, clip_id: str, t0: float) -> Clip:
        """Shift a clip to ``t0`` keeping its explicit span ``t1 - t0``."""

        clip = self._require(clip_id)
        if t0 < 0.0:
            raise ValueError("Clip start must be non-negative")
        span = clip.t1 - clip.t0
        clip.t0 = t0
        clip.t1 = t0 + span
        return clip

    def resize(self, clip_id: str, duration: float) -> Clip:
        """Set the explicit span of a clip to ``duration`` seconds."""

        clip = self._require(clip_id)
        if duration < 0.0:
            raise ValueError("Clip duration must be non-negative")
        clip.t1 = clip.t0 + duration
        return clip

    def assign_pattern(self, clip_id: str, pattern: Sequence[int]) -> Clip:
        """Attach ``pattern`` and stretch the span to the pattern length."""

        clip = self._require(clip_id)
        values = list(pattern)
        if any(value < 0 for value in values):
            raise ValueError("Pattern durations must be non-negative")
        clip.pattern = values
        clip.t1 = clip.t0 + max(MIN_CLIP_SECONDS, sum(values) / 1000.0)
        logger.debug("Assigned pattern %s to clip %s", values, clip_id)
        return clip

    def _require(self, clip_id: str) -> Clip:
        try:
            return self._clips[clip_id]
        except KeyError as exc:
            raise KeyError(f"Clip {clip_id!r} not found") from exc


__all__ = ["TimelineModel"]
