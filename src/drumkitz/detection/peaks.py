from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from drumkitz.audio import PcmAudio
from drumkitz.utils import get_logger

logger = get_logger(__name__)

DEFAULT_THRESHOLD = 0.1
MIN_PEAK_DISTANCE_S = 0.05
PRE_PEAK_BUFFER_S = 0.025
POST_PEAK_BUFFER_S = 0.05
MIN_SEGMENT_DURATION_S = 0.05
MAX_SEGMENT_DURATION_S = 0.2
RMS_WINDOW_S = 0.005

SampleInput = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True)
class HitSegment:
    """A detected hit, in seconds from the start of the buffer."""

    start: float
    end: float
    amplitude: float

    def duration(self) -> float:
        return max(0.0, self.end - self.start)

    def to_dict(self) -> Dict[str, float]:
        return {"start": self.start, "end": self.end, "amplitude": self.amplitude}


@dataclass(frozen=True)
class SampleCounts:
    min_peak_distance: int
    pre_peak_buffer: int
    post_peak_buffer: int
    min_segment: int
    max_segment: int
    rms_window: int


@dataclass(frozen=True)
class DetectionParams:
    min_peak_distance_s: float = MIN_PEAK_DISTANCE_S
    pre_peak_buffer_s: float = PRE_PEAK_BUFFER_S
    post_peak_buffer_s: float = POST_PEAK_BUFFER_S
    min_segment_s: float = MIN_SEGMENT_DURATION_S
    max_segment_s: float = MAX_SEGMENT_DURATION_S
    rms_window_s: float = RMS_WINDOW_S

    def in_samples(self, sample_rate: int) -> SampleCounts:
        """Convert the durations to sample counts, truncating toward zero."""
        return SampleCounts(
            min_peak_distance=int(self.min_peak_distance_s * sample_rate),
            pre_peak_buffer=int(self.pre_peak_buffer_s * sample_rate),
            post_peak_buffer=int(self.post_peak_buffer_s * sample_rate),
            min_segment=int(self.min_segment_s * sample_rate),
            max_segment=int(self.max_segment_s * sample_rate),
            # a zero-length window has no defined RMS
            rms_window=max(1, int(self.rms_window_s * sample_rate)),
        )


def window_rms(samples: SampleInput, window: int) -> np.ndarray:
    """RMS of ``samples[i:i + window]`` for every index ``i``.

    Windows running past the end of the buffer are truncated and averaged over
    the samples they actually cover. The sums come from a direct convolution,
    so a window holding only zeros yields exactly ``0.0``.
    """

    data = np.asarray(samples, dtype=np.float64)
    total = data.shape[0]
    if total == 0:
        return np.zeros(0, dtype=np.float64)
    window = max(1, int(window))
    squares = data * data
    sums = np.convolve(squares, np.ones(window, dtype=np.float64))[window - 1 :]
    counts = np.minimum(window, total - np.arange(total))
    return np.sqrt(sums / counts)


def detect_segments(
    samples: SampleInput,
    sample_rate: int,
    threshold: float = DEFAULT_THRESHOLD,
    params: Optional[DetectionParams] = None,
) -> List[HitSegment]:
    """Split a single channel into hit segments whose RMS rises above ``threshold``.

    A window whose RMS equals the threshold counts as below it. Each hit is
    padded by the pre/post buffers, stretched to the minimum duration, then
    clamped to the maximum duration, and no hit may start within the minimum
    peak distance of the previous hit's end. A hit still open when the buffer
    ends is closed at the buffer end (or the maximum duration) without the
    post buffer.

    The minimum-duration stretch is not re-clamped to the buffer length, so a
    hit falling off near the end can report an ``end`` past the buffer.

    Two-dimensional input is treated as ``(channels, frames)`` and only the
    first channel is analysed.
    """

    if params is None:
        params = DetectionParams()

    data = np.asarray(samples, dtype=np.float64)
    if data.ndim > 1:
        data = data[0] if data.shape[0] else np.zeros(0, dtype=np.float64)
    total = int(data.shape[0])
    if total == 0:
        return []

    counts = params.in_samples(sample_rate)
    rms = window_rms(data, counts.rms_window)
    above = rms > threshold
    rises = np.flatnonzero(above)
    falls = np.flatnonzero(~above)

    segments: List[HitSegment] = []
    last_peak_end = -counts.min_peak_distance
    cursor = 0

    while True:
        gate = last_peak_end + counts.min_peak_distance
        idx = int(np.searchsorted(rises, max(cursor, gate)))
        if idx >= len(rises):
            break
        onset = int(rises[idx])
        peak_start = max(onset - counts.pre_peak_buffer, gate)

        idx = int(np.searchsorted(falls, onset))
        if idx >= len(falls):
            max_amplitude = float(rms[onset:].max())
            peak_end = min(total, peak_start + counts.max_segment)
            if peak_end - peak_start >= counts.min_segment:
                segments.append(
                    _make_segment(peak_start, peak_end, max_amplitude, sample_rate)
                )
            break

        release = int(falls[idx])
        max_amplitude = float(rms[onset:release].max())
        peak_end = min(release + counts.post_peak_buffer, total)
        if peak_end - peak_start < counts.min_segment:
            peak_end = peak_start + counts.min_segment
        if peak_end - peak_start > counts.max_segment:
            peak_end = peak_start + counts.max_segment
        if peak_end - peak_start >= counts.min_segment:
            segments.append(_make_segment(peak_start, peak_end, max_amplitude, sample_rate))
            last_peak_end = peak_end
        cursor = release + 1

    logger.debug(
        "Detected hits",
        extra={"count": len(segments), "threshold": threshold, "sample_rate": sample_rate},
    )
    return segments


def detect_hits(
    audio: PcmAudio,
    threshold: float = DEFAULT_THRESHOLD,
    params: Optional[DetectionParams] = None,
) -> List[HitSegment]:
    if audio.num_channels == 0:
        return []
    return detect_segments(audio.channel(0), audio.sample_rate, threshold, params)


def _make_segment(start: int, end: int, amplitude: float, sample_rate: int) -> HitSegment:
    return HitSegment(start=start / sample_rate, end=end / sample_rate, amplitude=amplitude)
