import pytest

from domain.models import Clip
from domain.timeline import TimelineModel
from editor.capabilities import ManualPlaybackClock
from editor.coordinates import CoordinateMapper, Snapper
from editor.interaction import (
    DragMode,
    InteractionController,
    InteractionState,
    PointerEvent,
    SurfaceBounds,
)

TRACK_Y = 90.0


def _controller(model: TimelineModel | None = None, **kwargs) -> InteractionController:
    return InteractionController(
        model if model is not None else TimelineModel(),
        CoordinateMapper(px_per_sec=180.0, left_pad=60.0),
        **kwargs,
    )


def _x(seconds: float) -> float:
    return 60.0 + seconds * 180.0


def test_click_on_empty_space_creates_selected_clip():
    model = TimelineModel()
    clock = ManualPlaybackClock(total_duration=10.0)
    seeks: list[float] = []
    controller = _controller(model, clock=clock, on_seek=seeks.append)

    clip = controller.pointer_down(PointerEvent(x=_x(0.37), y=TRACK_Y))

    assert clip is not None
    assert clip.t0 == pytest.approx(0.4)
    assert clip.t1 == pytest.approx(0.8)
    assert clip.pattern == []
    assert model.selected_id == clip.id
    assert clock.position == pytest.approx(0.4)
    assert seeks == [pytest.approx(0.4)]
    assert controller.state is InteractionState.IDLE


def test_click_left_of_origin_creates_clip_at_zero():
    model = TimelineModel()
    controller = _controller(model)

    clip = controller.pointer_down(PointerEvent(x=0.0, y=TRACK_Y))

    assert clip.t0 == 0.0


def test_click_beyond_duration_clamps_playhead_only():
    model = TimelineModel()
    clock = ManualPlaybackClock(total_duration=10.0)
    controller = _controller(model, clock=clock)

    clip = controller.pointer_down(PointerEvent(x=_x(20.0), y=TRACK_Y))

    assert clip.t0 == pytest.approx(20.0)
    assert clock.position == pytest.approx(10.0)


def test_unknown_duration_falls_back_to_thirty_seconds():
    clock = ManualPlaybackClock()
    controller = _controller(clock=clock)

    controller.pointer_down(PointerEvent(x=_x(45.0), y=TRACK_Y))

    assert clock.position == pytest.approx(30.0)


def test_snap_disabled_keeps_raw_click_time():
    model = TimelineModel()
    controller = _controller(model, snapper=Snapper(enabled=False))

    clip = controller.pointer_down(PointerEvent(x=_x(0.37), y=TRACK_Y))

    assert clip.t0 == pytest.approx(0.37)


def test_move_drag_shifts_clip_and_never_goes_negative():
    model = TimelineModel([Clip(id="a", t0=1.0, t1=1.4)])
    controller = _controller(model)

    grabbed = controller.pointer_down(PointerEvent(x=_x(1.1), y=TRACK_Y))
    assert grabbed.id == "a"
    assert controller.state is InteractionState.DRAGGING_MOVE
    assert model.selected_id == "a"

    controller.pointer_move(PointerEvent(x=_x(1.6), y=TRACK_Y))
    clip = model.find("a")
    assert clip.t0 == pytest.approx(1.5)
    assert clip.t1 == pytest.approx(1.9)

    controller.pointer_move(PointerEvent(x=-10_000.0, y=TRACK_Y))
    assert clip.t0 == 0.0
    assert clip.t1 == pytest.approx(0.4)

    assert controller.pointer_up(PointerEvent(x=-10_000.0, y=TRACK_Y)) is True
    assert controller.state is InteractionState.IDLE
    assert controller.drag is None


def test_resize_drag_near_right_edge_respects_minimum():
    model = TimelineModel([Clip(id="a", t0=1.0, t1=1.4)])
    controller = _controller(model)
    start_x = _x(1.4) - 4.0

    controller.pointer_down(PointerEvent(x=start_x, y=TRACK_Y))
    assert controller.state is InteractionState.DRAGGING_RESIZE
    assert controller.drag.mode is DragMode.RESIZE

    controller.pointer_move(PointerEvent(x=start_x + 36.0, y=TRACK_Y))
    clip = model.find("a")
    assert clip.t0 == pytest.approx(1.0)
    assert clip.duration == pytest.approx(0.6)

    controller.pointer_move(PointerEvent(x=start_x - 1_000.0, y=TRACK_Y))
    assert clip.duration == pytest.approx(0.08)
    assert clip.t1 >= clip.t0

    assert controller.pointer_cancel(PointerEvent(x=0.0, y=0.0)) is True
    assert controller.state is InteractionState.IDLE


def test_hit_test_uses_pattern_duration():
    model = TimelineModel([Clip(id="a", t0=0.0, t1=0.1, pattern=[1000])])
    controller = _controller(model)

    hit = controller.hit_test(_x(0.8), TRACK_Y)

    assert hit is not None
    assert hit.clip.id == "a"
    assert hit.near_right is False


def test_hit_test_prefers_most_recent_clip_and_checks_vertical_band():
    model = TimelineModel(
        [Clip(id="old", t0=1.0, t1=1.4), Clip(id="new", t0=1.0, t1=1.4)]
    )
    controller = _controller(model)

    assert controller.hit_test(_x(1.1), TRACK_Y).clip.id == "new"
    assert controller.hit_test(_x(1.1), 65.0) is None
    assert controller.hit_test(_x(1.1), 115.0) is None


def test_click_above_track_creates_clip_instead_of_grabbing():
    model = TimelineModel([Clip(id="a", t0=1.0, t1=1.4)])
    controller = _controller(model)

    clip = controller.pointer_down(PointerEvent(x=_x(1.1), y=20.0))

    assert clip.id != "a"
    assert len(model) == 2
    assert controller.state is InteractionState.IDLE


def test_pointer_capture_ignores_other_pointers():
    model = TimelineModel([Clip(id="a", t0=1.0, t1=1.4)])
    controller = _controller(model)
    controller.pointer_down(PointerEvent(x=_x(1.1), y=TRACK_Y, pointer_id=1))

    assert controller.captured_pointer == 1
    assert controller.pointer_down(PointerEvent(x=_x(5.0), y=TRACK_Y, pointer_id=2)) is None
    assert len(model) == 1
    assert controller.pointer_move(PointerEvent(x=_x(3.0), y=TRACK_Y, pointer_id=2)) is None
    assert model.find("a").t0 == pytest.approx(1.0)
    assert controller.pointer_up(PointerEvent(x=0.0, y=0.0, pointer_id=2)) is False
    assert controller.state is InteractionState.DRAGGING_MOVE

    # Moves far outside the surface still route to the captured drag.
    controller.pointer_move(PointerEvent(x=_x(4.0), y=-500.0, pointer_id=1))
    assert model.find("a").t0 == pytest.approx(3.9)
    assert controller.pointer_up(PointerEvent(x=0.0, y=0.0, pointer_id=1)) is True
    assert controller.captured_pointer is None


def test_pointer_events_without_drag_are_ignored():
    controller = _controller()
    assert controller.pointer_move(PointerEvent(x=100.0, y=TRACK_Y)) is None
    assert controller.pointer_up(PointerEvent(x=100.0, y=TRACK_Y)) is False


def test_delete_key_removes_selection():
    model = TimelineModel([Clip(id="a", t0=1.0, t1=1.4), Clip(id="b", t0=3.0, t1=3.4)])
    controller = _controller(model)
    model.select("a")

    assert controller.key_down("Enter") is None
    removed = controller.key_down("Delete")

    assert removed.id == "a"
    assert model.selected_id is None
    assert [clip.id for clip in model] == ["b"]
    assert controller.key_down("Delete") is None
    assert len(model) == 1


def test_deleting_dragged_clip_ends_drag():
    model = TimelineModel([Clip(id="a", t0=1.0, t1=1.4)])
    controller = _controller(model)
    controller.pointer_down(PointerEvent(x=_x(1.1), y=TRACK_Y))

    controller.remove_selection()

    assert controller.state is InteractionState.IDLE
    assert controller.pointer_move(PointerEvent(x=_x(2.0), y=TRACK_Y)) is None


def test_surface_bounds_scale_device_coordinates():
    bounds = SurfaceBounds(
        left=10.0, top=20.0, width=400.0, height=100.0, logical_width=800.0, logical_height=200.0
    )
    event = PointerEvent.from_device(210.0, 70.0, bounds, pointer_id=7)

    assert (event.x, event.y) == (400.0, 100.0)
    assert event.pointer_id == 7
