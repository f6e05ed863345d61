from __future__ import annotations

import struct
from typing import Sequence, Union

import numpy as np

from drumkitz.audio import PcmAudio

WAV_HEADER_SIZE = 44
BITS_PER_SAMPLE = 16
PCM_FORMAT_TAG = 1

ChannelInput = Union[np.ndarray, Sequence[Sequence[float]]]


def encode_wav(channels: ChannelInput, sample_rate: int) -> bytes:
    """Serialize float channels as a 16-bit little-endian PCM WAV file.

    Samples are clamped to [-1, 1]; negatives scale by 0x8000 and positives by
    0x7FFF before truncation to int16.
    """

    data = np.asarray(channels, dtype=np.float64)
    if data.ndim == 1:
        data = data[np.newaxis, :]
    num_channels, num_frames = data.shape
    block_align = num_channels * (BITS_PER_SAMPLE // 8)
    data_size = num_frames * block_align

    clipped = np.clip(data, -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 0x8000, clipped * 0x7FFF)
    interleaved = np.trunc(scaled).astype("<i2").T.reshape(-1)

    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        PCM_FORMAT_TAG,
        num_channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        BITS_PER_SAMPLE,
        b"data",
        data_size,
    )
    return header + interleaved.tobytes()


def encode_pcm_audio(audio: PcmAudio) -> bytes:
    return encode_wav(audio.channels, audio.sample_rate)
