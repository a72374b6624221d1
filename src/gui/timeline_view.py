"""Pure timeline renderer producing backend-agnostic draw commands.

:func:`render_timeline` reads a :class:`TimelineSnapshot` and returns the
list of primitives a drawing surface should paint. It never touches
editor state, so hosts may call it every animation frame or not at all.
"""
from __future__ import annotations

import json
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence, Tuple, Union

import numpy as np

from domain.models import Clip
from domain.timeline import TimelineModel

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from editor.config import TrackGeometry
    from editor.coordinates import CoordinateMapper

BACKGROUND = "#0f1220"
TRACK = "#151a2e"
GRID = "#ffffff"
MAJOR_GRID = "rgba(255,255,255,0.35)"
LABEL = "#cfd6ff"
CLIP = "#7c5cff"
CLIP_SELECTED = "#6ee7ff"
PLAYHEAD = "#ffdd57"

MINOR_STEP_SECONDS = 0.2
MAJOR_STEP_SECONDS = 1.0
MIN_CLIP_WIDTH_PX = 10.0
HANDLE_WIDTH_PX = 6.0
LABEL_MAX_CHARS = 42


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: str
    alpha: float = 1.0


@dataclass(frozen=True)
class RoundRect:
    x: float
    y: float
    width: float
    height: float
    radius: float
    color: str
    alpha: float = 1.0


@dataclass(frozen=True)
class Line:
    x0: float
    y0: float
    x1: float
    y1: float
    color: str
    width: float = 1.0
    alpha: float = 1.0


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    color: str


DrawCommand = Union[FillRect, RoundRect, Line, Text]


@dataclass(frozen=True)
class ClipView:
    """Render-only copy of a clip."""

    id: str
    t0: float
    duration: float
    pattern: Tuple[int, ...]

    @classmethod
    def from_clip(cls, clip: Clip) -> ClipView:
        return cls(id=clip.id, t0=clip.t0, duration=clip.duration, pattern=tuple(clip.pattern))

    @property
    def label(self) -> str:
        if self.pattern:
            text = f"@{self.t0:.2f}s  {json.dumps(list(self.pattern), separators=(',', ':'))}"
        else:
            text = f"@{self.t0:.2f}s (no pattern)"
        return text[:LABEL_MAX_CHARS]


@dataclass(frozen=True)
class TimelineSnapshot:
    """Immutable view of everything the renderer needs for one frame."""

    clips: Tuple[ClipView, ...]
    selected_id: str | None
    playhead: float
    duration: float
    px_per_sec: float
    left_pad: float
    geometry: TrackGeometry
    width: float
    height: float

    @classmethod
    def capture(
        cls,
        model: TimelineModel,
        mapper: CoordinateMapper,
        *,
        geometry: TrackGeometry,
        playhead: float | None,
        duration: float,
        width: float,
        height: float,
    ) -> TimelineSnapshot:
        position = playhead if playhead is not None and math.isfinite(playhead) else 0.0
        return cls(
            clips=tuple(ClipView.from_clip(clip) for clip in model.clips),
            selected_id=model.selected_id,
            playhead=position,
            duration=duration,
            px_per_sec=mapper.px_per_sec,
            left_pad=mapper.left_pad,
            geometry=geometry,
            width=width,
            height=height,
        )

    def time_to_x(self, seconds: float) -> float:
        return self.left_pad + seconds * self.px_per_sec


def grid_ticks(duration: float, step: float) -> np.ndarray:
    """Return tick times from 0 through ``duration`` inclusive."""

    if duration < 0.0:
        return np.empty(0)
    count = int(math.floor(duration / step + 1e-9)) + 1
    return np.arange(count) * step


def _visible(snapshot: TimelineSnapshot, x: float) -> bool:
    return snapshot.left_pad <= x <= snapshot.width - snapshot.geometry.right_margin


def _format_seconds(seconds: float) -> str:
    return f"{seconds:g}s"


def render_timeline(snapshot: TimelineSnapshot) -> List[DrawCommand]:
    """Translate ``snapshot`` into an ordered list of draw commands."""

    geo = snapshot.geometry
    commands: List[DrawCommand] = [
        FillRect(0.0, 0.0, snapshot.width, snapshot.height, BACKGROUND),
        FillRect(
            snapshot.left_pad,
            geo.track_y,
            snapshot.width - snapshot.left_pad - geo.right_margin,
            geo.track_h,
            TRACK,
        ),
    ]

    for t in grid_ticks(snapshot.duration, MINOR_STEP_SECONDS):
        x = snapshot.time_to_x(float(t))
        if _visible(snapshot, x):
            commands.append(Line(x, geo.track_y, x, geo.track_y + geo.track_h, GRID, alpha=0.25))

    for t in grid_ticks(snapshot.duration, MAJOR_STEP_SECONDS):
        x = snapshot.time_to_x(float(t))
        if not _visible(snapshot, x):
            continue
        commands.append(Line(x, geo.top_pad, x, geo.track_y + geo.track_h, MAJOR_GRID))
        commands.append(Text(x + 2.0, geo.top_pad + 12.0, _format_seconds(float(t)), LABEL))

    commands.extend(_clip_commands(snapshot))

    px = snapshot.time_to_x(snapshot.playhead)
    commands.append(Line(px, geo.top_pad, px, geo.track_y + geo.track_h, PLAYHEAD, width=2.0))
    return commands


def _clip_commands(snapshot: TimelineSnapshot) -> List[DrawCommand]:
    geo = snapshot.geometry
    y0, y1 = geo.clip_top, geo.clip_bottom
    commands: List[DrawCommand] = []
    for clip in snapshot.clips:
        x0 = snapshot.time_to_x(clip.t0)
        x1 = snapshot.time_to_x(clip.t0 + clip.duration)
        selected = clip.id == snapshot.selected_id
        commands.append(
            RoundRect(
                x0,
                y0,
                max(MIN_CLIP_WIDTH_PX, x1 - x0),
                y1 - y0,
                8.0,
                CLIP_SELECTED if selected else CLIP,
                alpha=0.95 if selected else 0.75,
            )
        )
        commands.append(
            FillRect(x1 - HANDLE_WIDTH_PX, y0, HANDLE_WIDTH_PX, y1 - y0, BACKGROUND, alpha=0.65)
        )
        commands.append(Text(x0 + 8.0, y0 + 18.0, clip.label, BACKGROUND))
    return commands


class FrameLoop:
    """Repaint driver: render a fresh snapshot each time the host schedules a frame."""

    def __init__(
        self,
        snapshot_provider: Callable[[], TimelineSnapshot],
        sink: Callable[[Sequence[DrawCommand]], None],
        scheduler: Callable[[Callable[[], None]], object],
    ) -> None:
        self._snapshot_provider = snapshot_provider
        self._sink = sink
        self._scheduler = scheduler
        self._running = False
        self._frames = 0

    @property
    def frames(self) -> int:
        return self._frames

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._scheduler(self.tick)

    def stop(self) -> None:
        self._running = False

    def tick(self) -> None:
        if not self._running:
            return
        self._sink(render_timeline(self._snapshot_provider()))
        self._frames += 1
        self._scheduler(self.tick)


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
