import sys
from pathlib import Path

import pytest

from domain.models import Clip
from domain.timeline import TimelineModel
from editor.capabilities import ManualPlaybackClock, RecordingActuator
from editor.context import EditorContext

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture()
def example_timeline() -> TimelineModel:
    model = TimelineModel()
    model.add(Clip(id="intro", t0=1.0, t1=1.4, pattern=[100, 50, 100]))
    model.add(Clip(id="hit", t0=2.5, t1=2.9, pattern=[200]))
    model.add(Clip(id="empty", t0=0.5, t1=0.9))
    return model


@pytest.fixture()
def actuator() -> RecordingActuator:
    return RecordingActuator()


@pytest.fixture()
def clock() -> ManualPlaybackClock:
    return ManualPlaybackClock(total_duration=10.0)


@pytest.fixture()
def editor(actuator: RecordingActuator, clock: ManualPlaybackClock) -> EditorContext:
    return EditorContext(actuator=actuator, clock=clock)
