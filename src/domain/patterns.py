"""Pulse pattern parsing helpers.

Patterns are typed by users either as a JSON array (``[250, 100, 250]``)
or as a bare comma-separated list (``250,100,250``). Parsing is lenient
per token and strict about the overall result: unusable tokens are
dropped, but a text that leaves no durations behind is rejected.
"""
from __future__ import annotations

import json
import math
import re
from typing import Iterable, List, Optional, Sequence

from .errors import PatternParseError

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _coerce_token(token: object) -> Optional[int]:
    """Convert a single token the way a lenient integer parse would."""

    if isinstance(token, bool) or token is None:
        return None
    if isinstance(token, int):
        return token
    if isinstance(token, float):
        if not math.isfinite(token):
            return None
        return int(token)
    if isinstance(token, str):
        match = _LEADING_INT.match(token)
        if match is None:
            return None
        return int(match.group(1))
    return None


def _clean(tokens: Iterable[object]) -> List[int]:
    cleaned: List[int] = []
    for token in tokens:
        value = _coerce_token(token)
        if value is not None and value >= 0:
            cleaned.append(value)
    return cleaned


def parse_pattern(text: str | None) -> List[int]:
    """Parse ``text`` into a list of non-negative millisecond durations.

    Raises :class:`PatternParseError` when the text is empty, is malformed
    JSON, is JSON but not an array, or when no valid duration survives
    filtering.
    """

    stripped = (text or "").strip()
    if not stripped:
        raise PatternParseError("Pattern text is empty")

    if stripped.startswith("["):
        try:
            payload = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise PatternParseError(f"Pattern is not valid JSON: {exc.msg}") from exc
        if not isinstance(payload, list):
            raise PatternParseError("Pattern JSON must be an array")
        tokens: Sequence[object] = payload
    else:
        tokens = stripped.split(",")

    cleaned = _clean(tokens)
    if not cleaned:
        raise PatternParseError(
            "Pattern has no valid durations; use comma-separated numbers or a JSON array"
        )
    return cleaned


def pattern_duration_ms(pattern: Iterable[int] | None) -> int:
    """Return the total length of ``pattern`` in milliseconds."""

    return sum(pattern or ())


__all__ = ["parse_pattern", "pattern_duration_ms"]
