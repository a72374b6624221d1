"""Pydantic-powered domain models for haptic timeline clips.

A clip is a region of the media timeline carrying a pulse pattern: an
ordered list of millisecond durations that alternate between "on" and
"off" phases. The models validate the timeline invariants on construction
so every caller (editor, exporter, CLI) can rely on them.
"""
from __future__ import annotations

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field, NonNegativeInt, model_validator

MIN_CLIP_SECONDS = 0.08
DEFAULT_CLIP_SECONDS = 0.4


def new_clip_id() -> str:
    """Return an opaque, unique clip token."""

    return uuid.uuid4().hex


class Clip(BaseModel):
    """Timeline region with a start time, an end time and a pulse pattern."""

    id: str = Field(default_factory=new_clip_id)
    t0: float = Field(..., ge=0.0, allow_inf_nan=False, description="Start of the clip in seconds")
    t1: float = Field(..., allow_inf_nan=False, description="End of the clip in seconds")
    pattern: List[NonNegativeInt] = Field(
        default_factory=list, description="Alternating on/off durations in milliseconds"
    )
    fired_at: Optional[float] = Field(
        None, exclude=True, description="Start time the pattern last fired at"
    )

    @model_validator(mode="after")
    def validate_span(self) -> Clip:  # type: ignore[override]
        if self.t1 < self.t0:
            raise ValueError("Clip end `t1` must not precede its start `t0`")
        return self

    @classmethod
    def create_default(cls, t0: float, *, seconds: float = DEFAULT_CLIP_SECONDS) -> Clip:
        """Build an empty clip spanning ``seconds`` from ``t0``."""

        return cls(t0=t0, t1=t0 + seconds)

    @property
    def pattern_ms(self) -> int:
        """Return the total pattern length in milliseconds."""

        return sum(self.pattern)

    @property
    def duration(self) -> float:
        """Return the visual duration in seconds.

        A clip with a pattern is as long as its pattern (never shorter than
        :data:`MIN_CLIP_SECONDS`); an empty clip uses its explicit span.
        """

        if self.pattern:
            return max(MIN_CLIP_SECONDS, self.pattern_ms / 1000.0)
        return self.t1 - self.t0

    @property
    def end(self) -> float:
        """Return the visual end time of the clip."""

        return self.t0 + self.duration


class ClipExport(BaseModel):
    """Structured export record for a single clip."""

    time: float = Field(..., ge=0.0, description="Clip start rounded to milliseconds")
    pattern: List[NonNegativeInt] = Field(default_factory=list)


__all__ = [
    "Clip",
    "ClipExport",
    "DEFAULT_CLIP_SECONDS",
    "MIN_CLIP_SECONDS",
    "new_clip_id",
]
