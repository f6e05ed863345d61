"""Drum hit detection and sample extraction."""

from .detection import DetectionParams, HitSegment, detect_hits, detect_segments

__all__ = [
    "DetectionParams",
    "HitSegment",
    "detect_hits",
    "detect_segments",
]
