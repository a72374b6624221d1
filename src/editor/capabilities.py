"""Host capability interfaces: haptic actuator and playback clock.

The editor never talks to a platform API directly. Hosts inject an
:class:`Actuator` and a :class:`PlaybackClock`; the in-memory versions
below back the tests and CLI dry runs.
"""
from __future__ import annotations

import enum
import logging
import math
from typing import Callable, List, Optional, Protocol, Sequence, Union

logger = logging.getLogger(__name__)

PulseInput = Union[Sequence[int], int]
PositionListener = Callable[[float], None]
DurationListener = Callable[[float], None]


class Actuator(Protocol):
    """Single-channel vibration output."""

    def fire(self, pattern: PulseInput) -> None:
        """Start ``pattern`` (or a single pulse length) immediately."""

    def cancel(self) -> None:
        """Stop any active vibration."""


class PlaybackClock(Protocol):
    """Media playback position source and transport controls."""

    @property
    def position(self) -> float:
        """Current playback position in seconds (may be NaN before load)."""

    @property
    def total_duration(self) -> Optional[float]:
        """Total media length in seconds, ``None`` or NaN while unknown."""

    @property
    def is_playing(self) -> bool:
        """Whether the media is currently playing."""

    def subscribe(self, listener: PositionListener) -> None:
        """Register a callback for position changes."""

    def subscribe_duration(self, listener: DurationListener) -> None:
        """Register a callback for the one-time "duration known" event."""

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, seconds: float) -> None: ...


def effective_duration(clock: PlaybackClock | None, fallback: float = 30.0) -> float:
    """Return the clock duration, or ``fallback`` while it is unknown."""

    if clock is None:
        return fallback
    duration = clock.total_duration
    if duration is None or not math.isfinite(duration):
        return fallback
    return float(duration)


class RecordingActuator:
    """Actuator that records every call instead of vibrating hardware."""

    def __init__(self) -> None:
        self.history: List[List[int]] = []
        self.cancel_count = 0

    def fire(self, pattern: PulseInput) -> None:
        if isinstance(pattern, int):
            self.history.append([pattern])
        else:
            self.history.append(list(pattern))

    def cancel(self) -> None:
        self.cancel_count += 1

    def last_pattern(self) -> List[int] | None:
        return self.history[-1] if self.history else None


class ManualPlaybackClock:
    """Playback clock driven explicitly by the caller."""

    def __init__(self, *, total_duration: float | None = None) -> None:
        self._position = 0.0
        self._duration = total_duration
        self._playing = False
        self._listeners: List[PositionListener] = []
        self._duration_listeners: List[DurationListener] = []
        self._metadata_loaded = total_duration is not None

    @property
    def position(self) -> float:
        return self._position

    @property
    def total_duration(self) -> Optional[float]:
        return self._duration

    @property
    def is_playing(self) -> bool:
        return self._playing

    def subscribe(self, listener: PositionListener) -> None:
        self._listeners.append(listener)

    def subscribe_duration(self, listener: DurationListener) -> None:
        self._duration_listeners.append(listener)

    def play(self) -> None:
        self._playing = True

    def pause(self) -> None:
        self._playing = False

    def toggle(self) -> bool:
        self._playing = not self._playing
        return self._playing

    def seek(self, seconds: float) -> None:
        self.set_position(seconds)

    def set_position(self, seconds: float) -> None:
        """Jump to ``seconds`` and notify listeners."""

        self._position = float(seconds)
        for listener in list(self._listeners):
            listener(self._position)

    def advance(self, seconds: float) -> float:
        """Move forward by ``seconds``, stopping at the known duration."""

        target = self._position + seconds
        if self._duration is not None and math.isfinite(self._duration):
            target = min(self._duration, target)
        self.set_position(target)
        return self._position

    def load_metadata(self, total_duration: float) -> None:
        """Publish the media duration once, as a media element would on load."""

        if self._metadata_loaded:
            return
        self._duration = float(total_duration)
        self._metadata_loaded = True
        for listener in list(self._duration_listeners):
            listener(self._duration)


class HapticStatus(enum.Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class HapticGate:
    """Gate every actuator call behind availability and explicit arming.

    Platforms only allow vibration after a direct user gesture, so nothing
    fires until :meth:`arm` has been called. A missing actuator turns every
    call into a no-op and is reported once as informational status.
    """

    def __init__(self, actuator: Actuator | None = None, *, test_pulse_ms: int = 10) -> None:
        self._actuator = actuator
        self._armed = False
        self._test_pulse_ms = int(test_pulse_ms)
        self._status_reported = False

    @property
    def armed(self) -> bool:
        return self._armed

    @property
    def status(self) -> HapticStatus:
        if self._actuator is None:
            return HapticStatus.UNAVAILABLE
        return HapticStatus.AVAILABLE

    @property
    def available(self) -> bool:
        return self.status is HapticStatus.AVAILABLE

    def support_message(self) -> str:
        if self.available:
            return "Vibration supported on this device."
        return "Vibration not supported on this device."

    def report_status(self) -> str:
        """Log the support message the first time it is requested."""

        message = self.support_message()
        if not self._status_reported:
            logger.info(message)
            self._status_reported = True
        return message

    def arm(self) -> bool:
        """Allow vibration for the rest of the session and send a test pulse."""

        if not self._armed:
            self._armed = True
            logger.info("Haptic output armed")
        return self.fire(self._test_pulse_ms)

    def fire(self, pattern: PulseInput) -> bool:
        """Send ``pattern`` to the actuator; return whether it was sent."""

        if self._actuator is None:
            self.report_status()
            return False
        if not self._armed:
            logger.debug("Haptic output not armed; dropping %s", pattern)
            return False
        self._actuator.fire(pattern)
        return True

    def stop(self) -> bool:
        """Cancel active vibration; arming is not required."""

        if self._actuator is None:
            self.report_status()
            return False
        self._actuator.cancel()
        return True


__all__ = [
    "Actuator",
    "HapticGate",
    "HapticStatus",
    "ManualPlaybackClock",
    "PlaybackClock",
    "RecordingActuator",
    "effective_duration",
]
