from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class PcmAudio:
    """Decoded audio held as float samples, one row per channel."""

    channels: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        data = np.asarray(self.channels, dtype=np.float32)
        if data.ndim == 1:
            data = data[np.newaxis, :]
        if data.ndim != 2:
            raise ValueError("channels must be a 1-D or 2-D array")
        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        object.__setattr__(self, "channels", data)

    @classmethod
    def from_frames(cls, frames: np.ndarray, sample_rate: int) -> "PcmAudio":
        """Build from a ``(frames, channels)`` array as returned by soundfile."""
        data = np.asarray(frames, dtype=np.float32)
        if data.ndim == 1:
            return cls(channels=data, sample_rate=int(sample_rate))
        return cls(channels=data.T, sample_rate=int(sample_rate))

    @property
    def num_channels(self) -> int:
        return int(self.channels.shape[0])

    @property
    def num_frames(self) -> int:
        return int(self.channels.shape[1])

    @property
    def duration_s(self) -> float:
        return self.num_frames / self.sample_rate

    def channel(self, index: int = 0) -> np.ndarray:
        return self.channels[index]
