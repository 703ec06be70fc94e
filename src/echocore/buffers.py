"""Sample buffer value type and time reversal."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .diagnostics import call_logging_enabled, log_call
from .state import DEFAULT_SAMPLE_RATE
from .utils import ChannelLengthError, as_channel_frames, as_samples


@dataclass(slots=True, eq=False)
class AudioBuffer:
    """Decoded multi-channel samples shaped (C, F); the array is read-only."""

    samples: np.ndarray
    sample_rate: float = DEFAULT_SAMPLE_RATE

    def __post_init__(self) -> None:
        self.sample_rate = float(self.sample_rate)
        if self.sample_rate <= 0.0:
            raise ValueError("sample_rate must be positive")
        array = as_channel_frames(self.samples)
        if array.shape[0] < 1:
            raise ValueError("AudioBuffer needs at least one channel")
        array.setflags(write=False)
        self.samples = array

    @property
    def channels(self) -> int:
        return int(self.samples.shape[0])

    @property
    def frames(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate

    def channel(self, index: int) -> np.ndarray:
        return self.samples[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AudioBuffer):
            return NotImplemented
        return (
            self.sample_rate == other.sample_rate
            and self.samples.shape == other.samples.shape
            and bool(np.array_equal(self.samples, other.samples))
        )


def reverse_buffer(buffer):
    """Return the time-reverse of ``buffer`` without touching the input.

    ``AudioBuffer`` in gives ``AudioBuffer`` out (same sample rate).  numpy
    arrays keep their shape and dtype, (F,) being mono and (C, F) multi-channel.
    A sequence of per-channel sequences comes back as a float64 (C, F) array.
    Ragged channels raise :class:`ChannelLengthError`.
    """

    if isinstance(buffer, AudioBuffer):
        if call_logging_enabled():
            log_call(f"[buffers] reversed {buffer.channels}x{buffer.frames} AudioBuffer")
        # the constructor copies the flipped view once
        return AudioBuffer(np.flip(buffer.samples, axis=-1), sample_rate=buffer.sample_rate)

    if isinstance(buffer, np.ndarray):
        # as_samples copies the flipped view into fresh storage
        reversed_samples = as_samples(np.flip(buffer, axis=-1) if buffer.ndim else buffer)
    else:
        reversed_samples = as_samples(buffer)
        reversed_samples[...] = reversed_samples[..., ::-1]
    if call_logging_enabled():
        log_call(f"[buffers] reversed samples of shape {reversed_samples.shape}")
    return reversed_samples


__all__ = ["AudioBuffer", "ChannelLengthError", "reverse_buffer"]
