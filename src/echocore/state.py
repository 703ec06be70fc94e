"""Filter defaults, numeric bounds and buffer constants."""

from __future__ import annotations

from typing import Any, Dict

# =========================
# Buffers
# =========================
RAW_DTYPE = "float64"
DEFAULT_SAMPLE_RATE = 44100.0

# =========================
# Playback filter bounds
# =========================
SPEED_RATE_MIN = 0.5
SPEED_RATE_MAX = 1.75
SPEED_RATE_DEFAULT = 1.0

REVERB_INTENSITY_MIN = 0.0
REVERB_INTENSITY_MAX = 1.0
REVERB_INTENSITY_DEFAULT = 0.0

REPEAT_COUNT_MIN = 1
REPEAT_COUNT_DEFAULT = 1

DELAY_SECONDS_DEFAULT = 0.0

# Legacy slow/speed weighting: full slow intensity lands at 0.55x, full speed
# intensity at 1.75x.
LEGACY_SLOW_WEIGHT = 0.45
LEGACY_SPEED_WEIGHT = 0.75

# =========================
# Graph
# =========================
NODE_KINDS = ("soundboard", "textbox")

# Canonical key order for serialised filters.
FILTER_KEYS = (
    "speedRate",
    "reverbIntensity",
    "reversed",
    "playConcurrently",
    "loopEnabled",
    "loopDelaySeconds",
    "repeatCount",
    "repeatDelaySeconds",
)


def build_default_filters() -> Dict[str, Any]:
    """Return a fresh canonical filter mapping populated with defaults."""

    return {
        "speedRate": SPEED_RATE_DEFAULT,
        "reverbIntensity": REVERB_INTENSITY_DEFAULT,
        "reversed": False,
        "playConcurrently": False,
        "loopEnabled": False,
        "loopDelaySeconds": DELAY_SECONDS_DEFAULT,
        "repeatCount": REPEAT_COUNT_DEFAULT,
        "repeatDelaySeconds": DELAY_SECONDS_DEFAULT,
    }


__all__ = [
    "RAW_DTYPE",
    "DEFAULT_SAMPLE_RATE",
    "SPEED_RATE_MIN",
    "SPEED_RATE_MAX",
    "SPEED_RATE_DEFAULT",
    "REVERB_INTENSITY_MIN",
    "REVERB_INTENSITY_MAX",
    "REVERB_INTENSITY_DEFAULT",
    "REPEAT_COUNT_MIN",
    "REPEAT_COUNT_DEFAULT",
    "DELAY_SECONDS_DEFAULT",
    "LEGACY_SLOW_WEIGHT",
    "LEGACY_SPEED_WEIGHT",
    "NODE_KINDS",
    "FILTER_KEYS",
    "build_default_filters",
]
