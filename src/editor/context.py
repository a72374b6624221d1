"""Editor context bundling timeline state with its controllers.

Everything the editing session mutates (clips, selection, drag session,
haptic arming, last export) lives on one :class:`EditorContext` owned by
the host. Hosts forward pointer, keyboard and playback events to it and
render :meth:`EditorContext.snapshot` at whatever cadence they like.
"""
from __future__ import annotations

import logging
import math
from typing import List

from domain.errors import NoSelectionError
from domain.models import Clip
from domain.patterns import parse_pattern
from domain.timeline import TimelineModel
from domain.timeline_export import TimelineExporter
from gui.timeline_view import TimelineSnapshot

from .capabilities import (
    Actuator,
    HapticGate,
    HapticStatus,
    ManualPlaybackClock,
    PlaybackClock,
    effective_duration,
)
from .config import EditorConfig
from .coordinates import CoordinateMapper, Snapper
from .interaction import InteractionController, PointerEvent
from .playback_trigger import PlaybackTrigger

logger = logging.getLogger(__name__)


class EditorContext:
    """Explicit owner of one haptic timeline editing session."""

    def __init__(
        self,
        config: EditorConfig | None = None,
        *,
        actuator: Actuator | None = None,
        clock: PlaybackClock | None = None,
        model: TimelineModel | None = None,
    ) -> None:
        self.config = config if config is not None else EditorConfig()
        self.model = model if model is not None else TimelineModel()
        self.clock: PlaybackClock = clock if clock is not None else ManualPlaybackClock()
        self.mapper = CoordinateMapper(
            px_per_sec=self.config.px_per_sec,
            left_pad=self.config.left_pad,
            min_px_per_sec=self.config.min_px_per_sec,
            max_px_per_sec=self.config.max_px_per_sec,
            zoom_factor=self.config.zoom_factor,
        )
        self.snapper = Snapper(enabled=self.config.snap_enabled, step=self.config.snap_step)
        self.gate = HapticGate(actuator, test_pulse_ms=self.config.arm_test_pulse_ms)
        self.trigger = PlaybackTrigger(
            self.model,
            self.gate.fire,
            tolerance=self.config.trigger_tolerance,
            debounce_seconds=self.config.debounce_seconds,
        )
        self.controller = InteractionController(
            self.model,
            self.mapper,
            snapper=self.snapper,
            config=self.config,
            clock=self.clock,
            on_seek=self.trigger.reset,
        )
        self.exporter = TimelineExporter()
        self.output = ""
        self.duration_known = False
        self.clock.subscribe(self.on_position_change)
        self.clock.subscribe_duration(self.on_duration_known)

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------
    def on_position_change(self, position: float) -> List[Clip]:
        return self.trigger.on_position(position)

    def on_duration_known(self, duration: float) -> None:
        self.duration_known = True
        logger.info("Media duration known: %.3fs", duration)

    @property
    def duration(self) -> float:
        return effective_duration(self.clock, self.config.fallback_duration)

    @property
    def haptic_status(self) -> HapticStatus:
        return self.gate.status

    def support_status(self) -> str:
        return self.gate.report_status()

    # ------------------------------------------------------------------
    # Pointer / keyboard surface
    # ------------------------------------------------------------------
    def pointer_down(self, event: PointerEvent) -> Clip | None:
        return self.controller.pointer_down(event)

    def pointer_move(self, event: PointerEvent) -> Clip | None:
        return self.controller.pointer_move(event)

    def pointer_up(self, event: PointerEvent) -> bool:
        return self.controller.pointer_up(event)

    def pointer_cancel(self, event: PointerEvent) -> bool:
        return self.controller.pointer_cancel(event)

    def key_down(self, key: str) -> Clip | None:
        return self.controller.key_down(key)

    # ------------------------------------------------------------------
    # Editing actions
    # ------------------------------------------------------------------
    def apply_pattern(self, text: str) -> Clip:
        """Parse ``text`` and attach it to the selected clip."""

        clip = self.model.selected
        if clip is None:
            raise NoSelectionError("Select a clip first.")
        pattern = parse_pattern(text)
        return self.model.assign_pattern(clip.id, pattern)

    def add_clip_at_playhead(self, text: str) -> Clip:
        """Create a clip carrying the parsed pattern at the current position."""

        pattern = parse_pattern(text)
        position = self.clock.position
        t0 = position if position is not None and math.isfinite(position) else 0.0
        t0 = max(0.0, t0)
        clip = self.model.add(Clip(t0=t0, t1=t0))
        self.model.assign_pattern(clip.id, pattern)
        self.model.select(clip.id)
        return clip

    def delete_clip(self, clip_id: str) -> Clip | None:
        return self.model.remove(clip_id)

    def delete_selection(self) -> Clip | None:
        return self.controller.remove_selection()

    def clear_all(self) -> None:
        self.controller.reset()
        self.model.clear()
        self.output = ""

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def seek(self, seconds: float) -> float:
        target = min(self.duration, max(0.0, seconds))
        self.trigger.reset(target)
        self.clock.seek(target)
        return target

    def seek_to_clip(self, clip_id: str) -> float:
        clip = self.model.find(clip_id)
        if clip is None:
            raise KeyError(f"Clip {clip_id!r} not found")
        return self.seek(clip.t0)

    def toggle_playback(self) -> bool:
        """Pause a playing clock or start a paused one; return the new state."""

        if self.clock.is_playing:
            self.clock.pause()
        else:
            self.clock.play()
        return self.clock.is_playing

    # ------------------------------------------------------------------
    # Haptics
    # ------------------------------------------------------------------
    def arm(self) -> bool:
        return self.gate.arm()

    def stop_haptics(self) -> bool:
        return self.gate.stop()

    def preview_selected(self) -> bool:
        clip = self.model.selected
        if clip is None or not clip.pattern:
            raise NoSelectionError("Select a clip with a pattern.")
        return self.gate.fire(list(clip.pattern))

    def preview_text(self, text: str) -> bool:
        return self.gate.fire(parse_pattern(text))

    # ------------------------------------------------------------------
    # View settings
    # ------------------------------------------------------------------
    def zoom_in(self) -> float:
        return self.mapper.zoom_in()

    def zoom_out(self) -> float:
        return self.mapper.zoom_out()

    def set_snap(self, enabled: bool) -> None:
        self.snapper.enabled = bool(enabled)

    # ------------------------------------------------------------------
    # Export / rendering
    # ------------------------------------------------------------------
    def export_json(self) -> str:
        self.output = self.exporter.to_json(self.model.clips)
        return self.output

    def export_vibrate_call(self) -> str:
        self.output = self.exporter.to_vibrate_call(self.model.clips)
        return self.output

    def snapshot(self, width: float, height: float) -> TimelineSnapshot:
        return TimelineSnapshot.capture(
            self.model,
            self.mapper,
            geometry=self.config.geometry,
            playhead=self.clock.position,
            duration=self.duration,
            width=width,
            height=height,
        )


__all__ = ["EditorContext"]
