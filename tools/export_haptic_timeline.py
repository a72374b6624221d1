"""CLI helper that turns a clip list into structured JSON or a vibrate call."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from pydantic import ValidationError

from domain.errors import PatternParseError
from domain.models import DEFAULT_CLIP_SECONDS, Clip
from domain.patterns import parse_pattern
from domain.timeline import TimelineModel
from domain.timeline_export import TimelineExporter
from editor.capabilities import ManualPlaybackClock, RecordingActuator
from editor.context import EditorContext

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export haptic timeline clips as structured JSON or one flattened vibrate pattern.",
    )
    parser.add_argument(
        "--clips-file",
        type=Path,
        help="JSON document holding a list of clips ({\"t0\": 1.2, \"pattern\": [100, 50]}).",
    )
    parser.add_argument(
        "--clip",
        action="append",
        default=[],
        metavar="TIME=PATTERN",
        help="Clip start in seconds plus a pattern, e.g. 1.5=200,100,200. Repeatable.",
    )
    parser.add_argument(
        "--format",
        choices=("json", "vibrate"),
        default="json",
        help="Structured per-clip JSON or a single navigator.vibrate call.",
    )
    parser.add_argument(
        "--simulate",
        type=float,
        metavar="STEP_SECONDS",
        help="Play the clips back on a simulated clock advancing by STEP_SECONDS and list every trigger.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _clip_from_payload(entry: object) -> Clip:
    if not isinstance(entry, dict):
        raise SystemExit(f"Invalid clip entry {entry!r}; expected an object.")
    pattern = entry.get("pattern") or []
    t0 = entry.get("t0", entry.get("time"))
    if t0 is None:
        raise SystemExit(f"Clip entry {entry!r} is missing 't0'.")
    t1 = entry.get("t1")
    try:
        clip = Clip(t0=t0, t1=t0 if t1 is None else t1, pattern=pattern)
    except ValidationError as exc:
        raise SystemExit(
            f"Invalid clip entry {entry!r}: {exc.error_count()} validation error(s)."
        ) from exc
    if t1 is None:
        clip.t1 = clip.t0 + (clip.duration if clip.pattern else DEFAULT_CLIP_SECONDS)
    return clip


def _load_clips(path: Path) -> List[Clip]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Clips file '{path}' is not valid JSON: {exc.msg}") from exc
    if isinstance(payload, dict):
        payload = payload.get("clips", [])
    if not isinstance(payload, list):
        raise SystemExit(f"Clips file '{path}' must contain a JSON list of clips.")
    return [_clip_from_payload(entry) for entry in payload]


def _parse_clip_specs(entries: Iterable[str]) -> List[Clip]:
    clips: List[Clip] = []
    for entry in entries:
        if "=" not in entry:
            raise SystemExit(f"Invalid --clip entry '{entry}'. Expected TIME=PATTERN.")
        time_part, _, pattern_part = entry.partition("=")
        try:
            t0 = float(time_part.strip())
        except ValueError as exc:
            raise SystemExit(f"Invalid clip time '{time_part}' in '{entry}'.") from exc
        if t0 < 0.0:
            raise SystemExit(f"Clip time must be non-negative in '{entry}'.")
        try:
            pattern = parse_pattern(pattern_part)
        except PatternParseError as exc:
            raise SystemExit(f"Invalid pattern in '{entry}': {exc}") from exc
        clips.append(_clip_from_payload({"t0": t0, "pattern": pattern}))
    return clips


def simulate_playback(model: TimelineModel, step_seconds: float) -> List[tuple[float, Clip]]:
    """Advance a simulated clock across the timeline and collect every trigger."""

    if step_seconds <= 0.0:
        raise SystemExit("--simulate step must be positive.")
    end = max((clip.end for clip in model), default=0.0) + step_seconds
    clock = ManualPlaybackClock(total_duration=end)
    actuator = RecordingActuator()
    context = EditorContext(actuator=actuator, clock=clock, model=model)
    context.arm()

    fired: List[tuple[float, Clip]] = []
    context.trigger.add_fire_callback(lambda clip, position: fired.append((position, clip)))
    while clock.position < end:
        clock.advance(step_seconds)
    logger.info("Simulated playback to %.3fs: %d trigger(s)", end, len(fired))
    return fired


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )

    model = TimelineModel()
    if args.clips_file is not None:
        clips_file = args.clips_file.expanduser().resolve()
        if not clips_file.exists():
            raise SystemExit(f"Clips file '{clips_file}' does not exist.")
        for clip in _load_clips(clips_file):
            model.add(clip)
    for clip in _parse_clip_specs(args.clip):
        model.add(clip)
    logger.debug("Loaded %d clip(s)", len(model))

    exporter = TimelineExporter()
    if args.format == "vibrate":
        print(exporter.to_vibrate_call(model.clips))
    else:
        print(exporter.to_json(model.clips))

    if args.simulate is not None:
        for position, clip in simulate_playback(model, args.simulate):
            print(f"{position:.3f}s fired clip @{clip.t0:.3f}s {clip.pattern}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
