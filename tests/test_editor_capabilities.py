import logging

import pytest

from editor.capabilities import (
    HapticGate,
    HapticStatus,
    ManualPlaybackClock,
    RecordingActuator,
    effective_duration,
)


def test_gate_requires_arming_before_firing():
    actuator = RecordingActuator()
    gate = HapticGate(actuator)

    assert gate.fire([100, 50]) is False
    assert actuator.history == []

    assert gate.arm() is True
    assert gate.armed
    assert actuator.history == [[10]]

    assert gate.fire([100, 50]) is True
    assert actuator.last_pattern() == [100, 50]


def test_gate_stop_does_not_need_arming():
    actuator = RecordingActuator()
    gate = HapticGate(actuator)

    assert gate.stop() is True
    assert actuator.cancel_count == 1


def test_missing_actuator_degrades_to_noop_and_reports_once(caplog: pytest.LogCaptureFixture):
    gate = HapticGate(None)
    caplog.set_level(logging.INFO, logger="editor.capabilities")

    assert gate.status is HapticStatus.UNAVAILABLE
    assert gate.arm() is False
    assert gate.fire([100]) is False
    assert gate.stop() is False

    messages = [record.getMessage() for record in caplog.records if "not supported" in record.getMessage()]
    assert messages == ["Vibration not supported on this device."]


def test_available_status_message():
    gate = HapticGate(RecordingActuator())
    assert gate.status is HapticStatus.AVAILABLE
    assert gate.report_status() == "Vibration supported on this device."


def test_manual_clock_notifies_listeners_and_clamps():
    clock = ManualPlaybackClock(total_duration=1.0)
    positions: list[float] = []
    clock.subscribe(positions.append)

    clock.advance(0.6)
    clock.advance(0.6)
    clock.seek(0.25)

    assert positions == [pytest.approx(0.6), 1.0, 0.25]
    assert clock.position == 0.25


def test_manual_clock_transport_flags():
    clock = ManualPlaybackClock()
    clock.play()
    assert clock.is_playing
    clock.pause()
    assert not clock.is_playing
    assert clock.toggle() is True


def test_metadata_event_fires_once():
    clock = ManualPlaybackClock()
    durations: list[float] = []
    clock.subscribe_duration(durations.append)

    assert effective_duration(clock) == 30.0
    clock.load_metadata(12.5)
    clock.load_metadata(99.0)

    assert durations == [12.5]
    assert effective_duration(clock) == 12.5


def test_effective_duration_fallbacks():
    assert effective_duration(None) == 30.0
    assert effective_duration(ManualPlaybackClock(total_duration=float("nan")), fallback=5.0) == 5.0
