"""Transient hit detection."""

from .peaks import (
    DEFAULT_THRESHOLD,
    MAX_SEGMENT_DURATION_S,
    MIN_PEAK_DISTANCE_S,
    MIN_SEGMENT_DURATION_S,
    POST_PEAK_BUFFER_S,
    PRE_PEAK_BUFFER_S,
    RMS_WINDOW_S,
    DetectionParams,
    HitSegment,
    SampleCounts,
    detect_hits,
    detect_segments,
    window_rms,
)

__all__ = [
    "DEFAULT_THRESHOLD",
    "MAX_SEGMENT_DURATION_S",
    "MIN_PEAK_DISTANCE_S",
    "MIN_SEGMENT_DURATION_S",
    "POST_PEAK_BUFFER_S",
    "PRE_PEAK_BUFFER_S",
    "RMS_WINDOW_S",
    "DetectionParams",
    "HitSegment",
    "SampleCounts",
    "detect_hits",
    "detect_segments",
    "window_rms",
]
