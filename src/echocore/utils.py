# utils.py
import math
import sys
from numbers import Integral, Real

import numpy as np

from .state import RAW_DTYPE

# =========================
# Scalars
# =========================


def clamp(value, lo, hi):
    return min(hi, max(lo, value))


def is_real_number(value) -> bool:
    """``True`` for ints, floats and numpy scalars; ``bool`` does not count."""
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, Real)


def finite_number(value, fallback=None):
    """Return ``value`` as a float when it is a finite real number, else ``fallback``.

    Integers beyond the float range saturate at the largest finite float.
    """
    if not is_real_number(value):
        return fallback
    try:
        number = float(value)
    except OverflowError:
        if isinstance(value, Integral):
            return sys.float_info.max if value > 0 else -sys.float_info.max
        return fallback
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return number


def is_exact_bool(value) -> bool:
    return isinstance(value, (bool, np.bool_))


# =========================
# Channel layout
# =========================


class ChannelLengthError(ValueError):
    """Raised when the channels of a buffer do not share one length."""

    def __init__(self, lengths):
        self.lengths = tuple(int(n) for n in lengths)
        super().__init__(f"channels must share one length; got {list(self.lengths)}")


def as_samples(x, *, dtype=RAW_DTYPE):
    """
    Copy ``x`` into a fresh (F,) or (C, F) array.

    numpy input keeps its dtype; anything else is converted to ``dtype``.
    A sequence of per-channel sequences must have equal channel lengths.
    """
    if isinstance(x, np.ndarray):
        a = np.array(x, dtype=x.dtype, copy=True, order="C")
    else:
        channels = list(x)
        if channels and all(np.ndim(ch) == 1 for ch in channels):
            lengths = [len(ch) for ch in channels]
            if len(set(lengths)) > 1:
                raise ChannelLengthError(lengths)
        a = np.array(channels, dtype=dtype)
    if a.ndim not in (1, 2):
        raise ValueError(f"expected (F,) or (C, F) samples; got rank {a.ndim}")
    return a


def as_channel_frames(x, *, dtype=RAW_DTYPE):
    """Coerce ``x`` into a fresh (C, F) array; (F,) input becomes mono (1, F)."""
    a = as_samples(x, dtype=dtype)
    if a.ndim == 1:
        return a[None, :]
    return a
