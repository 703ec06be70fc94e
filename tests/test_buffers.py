import numpy as np
import pytest

from echocore.buffers import AudioBuffer, ChannelLengthError, reverse_buffer


def test_mono_sequence_reversed() -> None:
    out = reverse_buffer([[1.0, 2.0, 3.0]])
    np.testing.assert_array_equal(out, [[3.0, 2.0, 1.0]])


def test_empty_and_single_sample_are_identity() -> None:
    empty = reverse_buffer([])
    assert empty.shape == (0,)
    assert np.array_equal(empty, [])

    single = reverse_buffer([[5]])
    assert single.shape == (1, 1)
    assert np.array_equal(single, [[5]])

    silent = reverse_buffer(np.zeros((2, 0), dtype=np.float32))
    assert silent.shape == (2, 0)
    assert silent.dtype == np.float32


def test_surround_channels_reverse_independently() -> None:
    rng = np.random.default_rng(7)
    samples = rng.standard_normal((6, 257)).astype(np.float32)
    out = reverse_buffer(samples)
    assert out.shape == samples.shape
    assert out.dtype == np.float32
    for ch in range(6):
        np.testing.assert_array_equal(out[ch], samples[ch][::-1])
        for k in (0, 100, 256):
            assert out[ch, k] == samples[ch, 256 - k]


def test_one_dimensional_array_stays_mono() -> None:
    samples = np.array([-1.0, 0.0, 0.5], dtype=np.float64)
    np.testing.assert_array_equal(reverse_buffer(samples), [0.5, 0.0, -1.0])


def test_involution() -> None:
    rng = np.random.default_rng(11)
    for shape in [(1, 1), (2, 64), (6, 31), (0,), (17,)]:
        samples = rng.uniform(-1.0, 1.0, size=shape)
        np.testing.assert_array_equal(reverse_buffer(reverse_buffer(samples)), samples)


def test_input_not_mutated_and_memory_independent() -> None:
    samples = np.array([[0.1, -0.2, 0.3], [-1.0, 1.0, 0.0]], dtype=np.float32)
    snapshot = samples.copy()
    out = reverse_buffer(samples)
    np.testing.assert_array_equal(samples, snapshot)
    assert not np.shares_memory(out, samples)
    out[0, 0] = 99.0
    np.testing.assert_array_equal(samples, snapshot)

    nested = [[1.0, 2.0], [3.0, 4.0]]
    reverse_buffer(nested)
    assert nested == [[1.0, 2.0], [3.0, 4.0]]


def test_sign_and_magnitude_preserved() -> None:
    samples = np.array([[-1e-30, 3.5e10, -0.0, 7.25]])
    out = reverse_buffer(samples)
    np.testing.assert_array_equal(out, [[7.25, -0.0, 3.5e10, -1e-30]])
    assert np.signbit(out[0, 1])


def test_ragged_channels_fail_fast() -> None:
    with pytest.raises(ChannelLengthError) as info:
        reverse_buffer([[1.0, 2.0], [3.0]])
    assert info.value.lengths == (2, 1)
    assert isinstance(info.value, ValueError)


def test_rank_three_rejected() -> None:
    with pytest.raises(ValueError):
        reverse_buffer(np.zeros((2, 2, 2)))


def test_audio_buffer_round_trip() -> None:
    buf = AudioBuffer([[0.0, 0.25, 0.5, 0.75]], sample_rate=48000)
    out = reverse_buffer(buf)
    assert isinstance(out, AudioBuffer)
    assert out.sample_rate == 48000.0
    assert (out.channels, out.frames) == (1, 4)
    np.testing.assert_array_equal(out.channel(0), [0.75, 0.5, 0.25, 0.0])
    np.testing.assert_array_equal(reverse_buffer(out).samples, buf.samples)
    np.testing.assert_array_equal(buf.samples, [[0.0, 0.25, 0.5, 0.75]])
    assert not np.shares_memory(out.samples, buf.samples)


def test_audio_buffer_involution_is_deep_equal() -> None:
    buf = AudioBuffer([[0.1, 0.2, 0.3], [1.0, 2.0, 3.0]], sample_rate=48000)
    assert reverse_buffer(reverse_buffer(buf)) == buf
    assert reverse_buffer(buf) != buf


def test_audio_buffer_equality_checks_rate_and_shape() -> None:
    samples = [[0.1, 0.2, 0.3], [1.0, 2.0, 3.0]]
    assert AudioBuffer(samples, sample_rate=48000) == AudioBuffer(np.array(samples), sample_rate=48000.0)
    assert AudioBuffer(samples, sample_rate=48000) != AudioBuffer(samples, sample_rate=44100)
    assert AudioBuffer([[0.0, 0.0]]) != AudioBuffer([[0.0], [0.0]])
    assert AudioBuffer(samples) != samples


def test_reversal_allocates_fresh_base_storage() -> None:
    samples = np.arange(8, dtype=np.float32).reshape(2, 4)
    out = reverse_buffer(samples)
    assert out.base is None
    assert out.flags.c_contiguous
    listed = reverse_buffer([[1.0, 2.0, 3.0]])
    assert listed.base is None
    np.testing.assert_array_equal(listed, [[3.0, 2.0, 1.0]])
    buf_out = reverse_buffer(AudioBuffer(samples))
    assert buf_out.samples.base is None
    assert not buf_out.samples.flags.writeable


def test_audio_buffer_is_read_only() -> None:
    source = np.ones((2, 8))
    buf = AudioBuffer(source, sample_rate=8)
    assert buf.duration == pytest.approx(1.0)
    with pytest.raises(ValueError):
        buf.samples[0, 0] = 0.0
    source[0, 0] = 5.0
    assert buf.samples[0, 0] == 1.0


def test_audio_buffer_validation() -> None:
    with pytest.raises(ValueError):
        AudioBuffer([[0.0]], sample_rate=0)
    with pytest.raises(ValueError):
        AudioBuffer(np.zeros((0, 4)))
    with pytest.raises(ChannelLengthError):
        AudioBuffer([[0.0, 1.0], [0.0]])
