"""Export helpers turning timeline clips into shareable pattern data."""
from __future__ import annotations

import json
import logging
import math
from typing import Iterable, List, Sequence

from .models import Clip, ClipExport

logger = logging.getLogger(__name__)


def _sorted_by_start(clips: Iterable[Clip]) -> List[Clip]:
    return sorted(clips, key=lambda clip: clip.t0)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class TimelineExporter:
    """Serialize clips as structured records or as one flattened pulse sequence."""

    def __init__(self, *, time_decimals: int = 3, json_indent: int = 2) -> None:
        if time_decimals < 0:
            raise ValueError("time_decimals must be non-negative")
        self._time_decimals = int(time_decimals)
        self._json_indent = int(json_indent)

    def export_structured(self, clips: Iterable[Clip]) -> List[ClipExport]:
        """Return one ``{time, pattern}`` record per clip, ordered by start time."""

        return [
            ClipExport(time=round(clip.t0, self._time_decimals), pattern=list(clip.pattern))
            for clip in _sorted_by_start(clips)
        ]

    def to_json(self, clips: Iterable[Clip]) -> str:
        """Render :meth:`export_structured` as indented JSON text."""

        records = [record.model_dump(mode="json") for record in self.export_structured(clips)]
        logger.info("Exported %d clip(s) as structured JSON", len(records))
        return json.dumps(records, indent=self._json_indent)

    def flatten(self, clips: Iterable[Clip]) -> List[int]:
        """Merge every clip pattern into one alternating on/off sequence.

        The sequence always opens with an "on" phase, so a zero-length one
        is inserted before the first gap. Each clip contributes the silence
        since the previous pattern ended followed by its own durations.
        Patterns with an odd number of phases are appended verbatim, so the
        next gap may extend the same phase instead of alternating.
        """

        sequence: List[int] = []
        cursor_ms = 0
        for clip in _sorted_by_start(clips):
            if not clip.pattern:
                continue
            start_ms = max(0, _round_half_up(clip.t0 * 1000.0))
            gap = max(0, start_ms - cursor_ms)
            if not sequence:
                sequence.append(0)
            sequence.append(gap)
            sequence.extend(clip.pattern)
            cursor_ms = start_ms + clip.pattern_ms
        return sequence

    @staticmethod
    def vibrate_call(sequence: Sequence[int]) -> str:
        """Format ``sequence`` as a ready-to-paste Vibration API call."""

        return f"navigator.vibrate({json.dumps(list(sequence), separators=(',', ':'))});"

    def to_vibrate_call(self, clips: Iterable[Clip]) -> str:
        sequence = self.flatten(clips)
        logger.info("Flattened clips into %d pulse phase(s)", len(sequence))
        return self.vibrate_call(sequence)


__all__ = ["TimelineExporter"]
