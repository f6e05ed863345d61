from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

SAMPLE_RATE = 48_000


def make_hits(spans, total: int = SAMPLE_RATE) -> np.ndarray:
    samples = np.zeros(total, dtype=np.float32)
    for start, stop, value in spans:
        samples[start:stop] = value
    return samples


@pytest.fixture
def drum_loop() -> np.ndarray:
    """One second with three well separated hits."""
    return make_hits([(4800, 5040, 0.5), (20_000, 20_480, 0.8), (36_000, 36_240, 0.3)])


@pytest.fixture
def drum_loop_wav(tmp_path: Path, drum_loop: np.ndarray) -> Path:
    audio_path = tmp_path / "loop.wav"
    stereo = np.stack([drum_loop, drum_loop * 0.5], axis=1)
    sf.write(audio_path, stereo, SAMPLE_RATE, subtype="FLOAT")
    return audio_path
