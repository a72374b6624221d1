"""Pointer-driven clip editing state machine."""
from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import List

from domain.models import Clip
from domain.timeline import TimelineModel

from .capabilities import PlaybackClock, effective_duration
from .config import EditorConfig, TrackGeometry
from .coordinates import CoordinateMapper, Snapper

logger = logging.getLogger(__name__)

DELETE_KEYS = frozenset({"Delete"})


class InteractionState(enum.Enum):
    IDLE = "idle"
    DRAGGING_MOVE = "dragging_move"
    DRAGGING_RESIZE = "dragging_resize"


class DragMode(enum.Enum):
    MOVE = "move"
    RESIZE = "resize"


@dataclass(frozen=True)
class SurfaceBounds:
    """On-screen rectangle of the drawing surface plus its logical size."""

    left: float
    top: float
    width: float
    height: float
    logical_width: float
    logical_height: float

    def to_logical(self, client_x: float, client_y: float) -> tuple[float, float]:
        """Scale device coordinates into the surface's logical pixels."""

        scale_x = self.logical_width / self.width if self.width else 1.0
        scale_y = self.logical_height / self.height if self.height else 1.0
        return (client_x - self.left) * scale_x, (client_y - self.top) * scale_y


@dataclass(frozen=True)
class PointerEvent:
    """Pointer sample already expressed in logical surface coordinates."""

    x: float
    y: float
    pointer_id: int = 1

    @classmethod
    def from_device(
        cls,
        client_x: float,
        client_y: float,
        bounds: SurfaceBounds,
        *,
        pointer_id: int = 1,
    ) -> PointerEvent:
        x, y = bounds.to_logical(client_x, client_y)
        return cls(x=x, y=y, pointer_id=pointer_id)


@dataclass(frozen=True)
class ClipHit:
    clip: Clip
    near_right: bool

    @property
    def mode(self) -> DragMode:
        return DragMode.RESIZE if self.near_right else DragMode.MOVE


@dataclass(frozen=True)
class DragSession:
    """Snapshot taken at drag start; every move is computed from it."""

    clip_id: str
    mode: DragMode
    pointer_id: int
    start_x: float
    start_t0: float
    start_duration: float


class InteractionController:
    """Create, select, move, resize and delete clips from pointer input."""

    def __init__(
        self,
        model: TimelineModel,
        mapper: CoordinateMapper,
        *,
        snapper: Snapper | None = None,
        config: EditorConfig | None = None,
        clock: PlaybackClock | None = None,
        on_seek: Callable[[float], None] | None = None,
    ) -> None:
        self._model = model
        self._mapper = mapper
        self._config = config if config is not None else EditorConfig()
        if snapper is None:
            snapper = Snapper(enabled=self._config.snap_enabled, step=self._config.snap_step)
        self._snapper = snapper
        self._clock = clock
        self._seek_callbacks: List[Callable[[float], None]] = []
        if on_seek is not None:
            self._seek_callbacks.append(on_seek)
        self._drag: DragSession | None = None

    @property
    def state(self) -> InteractionState:
        if self._drag is None:
            return InteractionState.IDLE
        if self._drag.mode is DragMode.RESIZE:
            return InteractionState.DRAGGING_RESIZE
        return InteractionState.DRAGGING_MOVE

    @property
    def drag(self) -> DragSession | None:
        return self._drag

    @property
    def captured_pointer(self) -> int | None:
        return None if self._drag is None else self._drag.pointer_id

    @property
    def snapper(self) -> Snapper:
        return self._snapper

    @property
    def geometry(self) -> TrackGeometry:
        return self._config.geometry

    def add_seek_callback(self, callback: Callable[[float], None]) -> None:
        """Register a function invoked whenever a click moves the playhead."""

        self._seek_callbacks.append(callback)

    def hit_test(self, x: float, y: float) -> ClipHit | None:
        """Return the topmost clip under ``(x, y)`` and whether it hit the handle."""

        geometry = self._config.geometry
        if y < geometry.clip_top or y > geometry.clip_bottom:
            return None
        for clip in self._model.iter_topmost():
            x0 = self._mapper.time_to_x(clip.t0)
            x1 = self._mapper.time_to_x(clip.end)
            if x0 <= x <= x1:
                return ClipHit(clip=clip, near_right=(x1 - x) < self._config.resize_handle_px)
        return None

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------
    def pointer_down(self, event: PointerEvent) -> Clip | None:
        """Start a drag on a clip, or create a clip on empty space.

        Returns the clip that was grabbed or created. While another pointer
        holds the capture the event is ignored and ``None`` is returned.
        """

        if self._drag is not None:
            logger.debug(
                "Ignoring pointer %s while pointer %s is captured",
                event.pointer_id,
                self._drag.pointer_id,
            )
            return None

        hit = self.hit_test(event.x, event.y)
        if hit is not None:
            clip = hit.clip
            self._model.select(clip.id)
            self._drag = DragSession(
                clip_id=clip.id,
                mode=hit.mode,
                pointer_id=event.pointer_id,
                start_x=event.x,
                start_t0=clip.t0,
                start_duration=clip.duration,
            )
            logger.debug("Started %s drag on clip %s", hit.mode.value, clip.id)
            return clip

        t0 = self._snapper.snap(max(0.0, self._mapper.x_to_time(event.x)))
        clip = self._model.add(
            Clip.create_default(t0, seconds=self._config.default_clip_seconds)
        )
        self._model.select(clip.id)
        self._seek(t0)
        return clip

    def pointer_move(self, event: PointerEvent) -> Clip | None:
        """Apply the horizontal delta since drag start to the dragged clip."""

        drag = self._drag
        if drag is None or event.pointer_id != drag.pointer_id:
            return None
        clip = self._model.find(drag.clip_id)
        if clip is None:
            return None

        dt = self._mapper.dx_to_seconds(event.x - drag.start_x)
        if drag.mode is DragMode.MOVE:
            t0 = max(0.0, self._snapper.snap(drag.start_t0 + dt))
            return self._model.move(clip.id, t0)
        duration = max(
            self._config.min_clip_seconds, self._snapper.snap(drag.start_duration + dt)
        )
        return self._model.resize(clip.id, duration)

    def pointer_up(self, event: PointerEvent) -> bool:
        return self._release(event)

    def pointer_cancel(self, event: PointerEvent) -> bool:
        return self._release(event)

    # ------------------------------------------------------------------
    # Keyboard / selection
    # ------------------------------------------------------------------
    def key_down(self, key: str) -> Clip | None:
        if key in DELETE_KEYS:
            return self.remove_selection()
        return None

    def remove_selection(self) -> Clip | None:
        """Delete the selected clip; no-op without a selection."""

        selected_id = self._model.selected_id
        if selected_id is None:
            return None
        removed = self._model.remove(selected_id)
        self._model.select(None)
        if self._drag is not None and self._drag.clip_id == selected_id:
            self._drag = None
        return removed

    def reset(self) -> None:
        """Drop any in-flight drag session."""

        self._drag = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _release(self, event: PointerEvent) -> bool:
        if self._drag is None or event.pointer_id != self._drag.pointer_id:
            return False
        logger.debug("Released drag on clip %s", self._drag.clip_id)
        self._drag = None
        return True

    def _seek(self, seconds: float) -> None:
        target = min(effective_duration(self._clock, self._config.fallback_duration), seconds)
        target = max(0.0, target)
        for callback in self._seek_callbacks:
            callback(target)
        if self._clock is not None:
            self._clock.seek(target)


__all__ = [
    "ClipHit",
    "DELETE_KEYS",
    "DragMode",
    "DragSession",
    "InteractionController",
    "InteractionState",
    "PointerEvent",
    "SurfaceBounds",
]
