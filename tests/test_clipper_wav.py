from __future__ import annotations

import io
import struct

import numpy as np
import soundfile as sf

from drumkitz.audio import PcmAudio
from drumkitz.clipper import encode_pcm_audio, encode_wav


def _frames(payload: bytes) -> np.ndarray:
    return np.frombuffer(payload[44:], dtype="<i2")


def test_encode_wav_writes_canonical_header() -> None:
    payload = encode_wav(np.zeros((2, 10)), 44_100)

    fields = struct.unpack("<4sI4s4sIHHIIHH4sI", payload[:44])
    assert fields == (
        b"RIFF",
        36 + 40,
        b"WAVE",
        b"fmt ",
        16,
        1,
        2,
        44_100,
        44_100 * 4,
        4,
        16,
        b"data",
        40,
    )
    assert len(payload) == 44 + 40


def test_encode_wav_quantizes_asymmetrically() -> None:
    payload = encode_wav([[-1.5, -1.0, -0.5, -0.3, 0.0, 0.5, 1.0, 2.0]], 8000)

    assert _frames(payload).tolist() == [-32768, -32768, -16384, -9830, 0, 16383, 32767, 32767]


def test_encode_wav_interleaves_channels() -> None:
    payload = encode_wav([[0.5, 0.25], [-0.5, -0.25]], 8000)

    assert _frames(payload).tolist() == [16383, -16384, 8191, -8192]


def test_encode_wav_empty_buffer_is_header_only() -> None:
    payload = encode_wav(np.zeros((1, 0)), 8000)

    assert len(payload) == 44
    assert struct.unpack("<I", payload[40:44]) == (0,)


def test_wav_round_trip_stays_within_one_quantization_step() -> None:
    rng = np.random.default_rng(3)
    source = rng.uniform(-1.0, 1.0, size=(2, 2000))
    audio = PcmAudio(source, 22_050)

    decoded, sample_rate = sf.read(io.BytesIO(encode_pcm_audio(audio)), dtype="float64")
    raw, _ = sf.read(io.BytesIO(encode_pcm_audio(audio)), dtype="int16")

    assert sample_rate == 22_050
    assert decoded.shape == (2000, 2)
    source64 = audio.channels.astype(np.float64)
    expected = np.trunc(np.where(source64 < 0, source64 * 0x8000, source64 * 0x7FFF)).astype(np.int16)
    np.testing.assert_array_equal(raw.T, expected)
    # 0x7FFF scaling on encode against 0x8000 on decode adds up to one extra step
    assert np.max(np.abs(decoded.T - audio.channels)) <= 2 / 32768
