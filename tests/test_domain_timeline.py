import pytest

from domain.models import Clip
from domain.timeline import TimelineModel


def test_add_find_and_insertion_order(example_timeline: TimelineModel):
    assert [clip.id for clip in example_timeline] == ["intro", "hit", "empty"]
    assert example_timeline.find("hit").t0 == 2.5
    assert example_timeline.find("missing") is None
    assert example_timeline.find(None) is None
    assert len(example_timeline) == 3
    assert "intro" in example_timeline


def test_duplicate_ids_are_rejected(example_timeline: TimelineModel):
    with pytest.raises(ValueError):
        example_timeline.add(Clip(id="intro", t0=0.0, t1=0.4))


def test_list_sorted_by_start_keeps_ties_in_insertion_order():
    model = TimelineModel(
        [
            Clip(id="b", t0=1.0, t1=1.4),
            Clip(id="a", t0=0.2, t1=0.6),
            Clip(id="c", t0=1.0, t1=1.4),
        ]
    )
    assert [clip.id for clip in model.list_sorted_by_start()] == ["a", "b", "c"]


def test_iter_topmost_yields_newest_first(example_timeline: TimelineModel):
    assert [clip.id for clip in example_timeline.iter_topmost()] == ["empty", "hit", "intro"]


def test_remove_clears_matching_selection(example_timeline: TimelineModel):
    example_timeline.select("hit")
    removed = example_timeline.remove("hit")
    assert removed is not None and removed.id == "hit"
    assert example_timeline.selected_id is None
    assert example_timeline.selected is None


def test_remove_keeps_unrelated_selection(example_timeline: TimelineModel):
    example_timeline.select("intro")
    example_timeline.remove("hit")
    assert example_timeline.selected_id == "intro"
    assert example_timeline.remove("hit") is None


def test_select_unknown_clip_raises(example_timeline: TimelineModel):
    with pytest.raises(KeyError):
        example_timeline.select("missing")
    example_timeline.select("intro")
    assert example_timeline.select(None) is None
    assert example_timeline.selected is None


def test_clear_drops_clips_and_selection(example_timeline: TimelineModel):
    example_timeline.select("intro")
    example_timeline.clear()
    assert len(example_timeline) == 0
    assert example_timeline.selected_id is None


def test_move_preserves_explicit_span(example_timeline: TimelineModel):
    clip = example_timeline.move("empty", 3.0)
    assert clip.t0 == pytest.approx(3.0)
    assert clip.t1 == pytest.approx(3.4)
    assert clip.duration == pytest.approx(0.4)


def test_move_refuses_negative_start(example_timeline: TimelineModel):
    with pytest.raises(ValueError):
        example_timeline.move("empty", -0.1)
    assert example_timeline.find("empty").t0 == 0.5


def test_resize_sets_end(example_timeline: TimelineModel):
    clip = example_timeline.resize("empty", 1.0)
    assert clip.t1 == pytest.approx(1.5)
    with pytest.raises(ValueError):
        example_timeline.resize("empty", -1.0)
    assert clip.t1 == pytest.approx(1.5)


def test_assign_pattern_resets_end(example_timeline: TimelineModel):
    clip = example_timeline.assign_pattern("empty", [300, 200])
    assert clip.pattern == [300, 200]
    assert clip.t1 == pytest.approx(1.0)

    clip = example_timeline.assign_pattern("empty", [10])
    assert clip.t1 == pytest.approx(0.58)


def test_assign_pattern_rejects_negative_values(example_timeline: TimelineModel):
    with pytest.raises(ValueError):
        example_timeline.assign_pattern("intro", [100, -5])
    assert example_timeline.find("intro").pattern == [100, 50, 100]


def test_mutators_raise_for_unknown_clip(example_timeline: TimelineModel):
    with pytest.raises(KeyError):
        example_timeline.move("missing", 1.0)
