"""Normalisation of soundboard playback filters.

Raw filter data arrives from the configuration editor, from older documents
that still carry the ``lowpass``/``highpass``/``reverb`` switches, or from
hand-edited snapshots.  :func:`normalize_filters` maps any of those shapes to a
fully populated :class:`SoundboardFilterConfig` without ever raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping

from .diagnostics import call_logging_enabled, log_call
from .state import (
    DELAY_SECONDS_DEFAULT,
    LEGACY_SLOW_WEIGHT,
    LEGACY_SPEED_WEIGHT,
    REPEAT_COUNT_DEFAULT,
    REPEAT_COUNT_MIN,
    REVERB_INTENSITY_DEFAULT,
    REVERB_INTENSITY_MAX,
    REVERB_INTENSITY_MIN,
    SPEED_RATE_DEFAULT,
    SPEED_RATE_MAX,
    SPEED_RATE_MIN,
)
from .utils import clamp, finite_number, is_exact_bool


@dataclass(slots=True)
class SoundboardFilterConfig:
    """Canonical playback parameters for one soundboard entry."""

    speed_rate: float = SPEED_RATE_DEFAULT
    reverb_intensity: float = REVERB_INTENSITY_DEFAULT
    reversed: bool = False
    play_concurrently: bool = False
    loop_enabled: bool = False
    loop_delay_seconds: float = DELAY_SECONDS_DEFAULT
    repeat_count: int = REPEAT_COUNT_DEFAULT
    repeat_delay_seconds: float = DELAY_SECONDS_DEFAULT

    def to_dict(self) -> Dict[str, Any]:
        """Return the canonical camelCase mapping (exactly the schema keys)."""

        return {
            "speedRate": self.speed_rate,
            "reverbIntensity": self.reverb_intensity,
            "reversed": self.reversed,
            "playConcurrently": self.play_concurrently,
            "loopEnabled": self.loop_enabled,
            "loopDelaySeconds": self.loop_delay_seconds,
            "repeatCount": self.repeat_count,
            "repeatDelaySeconds": self.repeat_delay_seconds,
        }

    @classmethod
    def from_mapping(cls, raw: Any) -> "SoundboardFilterConfig":
        return normalize_filters(raw)


# =========================
# Legacy migration table
# =========================


def _legacy_number(value: Any) -> float | None:
    if is_exact_bool(value):
        return 1.0 if value else 0.0
    return finite_number(value)


def legacy_intensity(value: Any) -> float:
    """Map a legacy filter strength onto [0, 1].

    Finite numbers are clamped and booleans count as 0 or 1; anything else is
    "off".  Legacy documents stored ``1`` for an enabled filter, which lands on
    full intensity.
    """

    number = _legacy_number(value)
    if number is None:
        return 0.0
    return clamp(number, 0.0, 1.0)


def speed_rate_from_intensities(slow: float, speed: float) -> float:
    """Combine slow/speed intensities into a playback rate.

    Neutral (1.0) at ``slow == speed == 0``; full slow gives 0.55x and full
    speed gives 1.75x.  Decreasing in ``slow``, increasing in ``speed``.
    """

    rate = (1.0 - LEGACY_SLOW_WEIGHT * slow) * (1.0 + LEGACY_SPEED_WEIGHT * speed)
    return clamp(rate, SPEED_RATE_MIN, SPEED_RATE_MAX)


# legacy key -> (intermediate quantity, conversion); earlier keys win.
LEGACY_CONVERSIONS: Dict[str, tuple[str, Callable[[Any], float]]] = {
    "slowIntensity": ("slow", legacy_intensity),
    "lowpass": ("slow", legacy_intensity),
    "speedIntensity": ("speed", legacy_intensity),
    "highpass": ("speed", legacy_intensity),
    "reverb": ("reverb", legacy_intensity),
}


def _legacy_hints(raw: Mapping[str, Any]) -> Dict[str, float]:
    hints: Dict[str, float] = {}
    for key, (target, convert) in LEGACY_CONVERSIONS.items():
        if key not in raw or target in hints:
            continue
        # unusable values yield to the next key for the same target
        if _legacy_number(raw[key]) is None:
            continue
        hints[target] = convert(raw[key])
    return hints


# =========================
# Field readers
# =========================


def _trace(key: str, value: Any, fallback: Any) -> None:
    if call_logging_enabled():
        log_call(f"[filters] {key}={value!r} rejected; using {fallback!r}")


def _read_number(raw: Mapping[str, Any], key: str, fallback: float) -> float:
    if key not in raw:
        return fallback
    number = finite_number(raw[key])
    if number is None:
        _trace(key, raw[key], fallback)
        return fallback
    return number


def _read_bool(raw: Mapping[str, Any], key: str) -> bool:
    value = raw.get(key, False)
    if is_exact_bool(value):
        return bool(value)
    _trace(key, value, False)
    return False


def _read_repeat_count(raw: Mapping[str, Any]) -> int:
    number = _read_number(raw, "repeatCount", float(REPEAT_COUNT_DEFAULT))
    count = math.trunc(number)
    if count < REPEAT_COUNT_MIN:
        return REPEAT_COUNT_MIN
    return int(count)


def _read_delay(raw: Mapping[str, Any], key: str) -> float:
    return max(DELAY_SECONDS_DEFAULT, _read_number(raw, key, DELAY_SECONDS_DEFAULT))


# =========================
# Public entry point
# =========================


def normalize_filters(raw: Any = None) -> SoundboardFilterConfig:
    """Return the canonical filter configuration for ``raw``.

    ``raw`` may be ``None``, a mapping with canonical and/or legacy keys, or an
    existing :class:`SoundboardFilterConfig`.  Any other value is treated as an
    empty mapping.  The input is never mutated.
    """

    if isinstance(raw, SoundboardFilterConfig):
        raw = raw.to_dict()
    elif not isinstance(raw, Mapping):
        if raw is not None:
            _trace("<filters>", type(raw).__name__, {})
        raw = {}

    hints = _legacy_hints(raw)
    if hints and call_logging_enabled():
        consumed = sorted(key for key in LEGACY_CONVERSIONS if key in raw)
        log_call(f"[filters] legacy fields {consumed} -> {hints}")

    if "slow" in hints or "speed" in hints:
        speed_fallback = speed_rate_from_intensities(hints.get("slow", 0.0), hints.get("speed", 0.0))
    else:
        speed_fallback = SPEED_RATE_DEFAULT
    reverb_fallback = hints.get("reverb", REVERB_INTENSITY_DEFAULT)

    return SoundboardFilterConfig(
        speed_rate=float(clamp(_read_number(raw, "speedRate", speed_fallback), SPEED_RATE_MIN, SPEED_RATE_MAX)),
        reverb_intensity=float(
            clamp(
                _read_number(raw, "reverbIntensity", reverb_fallback),
                REVERB_INTENSITY_MIN,
                REVERB_INTENSITY_MAX,
            )
        ),
        reversed=_read_bool(raw, "reversed"),
        play_concurrently=_read_bool(raw, "playConcurrently"),
        loop_enabled=_read_bool(raw, "loopEnabled"),
        loop_delay_seconds=_read_delay(raw, "loopDelaySeconds"),
        repeat_count=_read_repeat_count(raw),
        repeat_delay_seconds=_read_delay(raw, "repeatDelaySeconds"),
    )


__all__ = [
    "LEGACY_CONVERSIONS",
    "SoundboardFilterConfig",
    "legacy_intensity",
    "normalize_filters",
    "speed_rate_from_intensities",
]
