from __future__ import annotations

from drumkitz.audio import PcmAudio
from drumkitz.detection import HitSegment
from drumkitz.errors import SliceRangeError


def slice_audio(audio: PcmAudio, start_s: float, end_s: float) -> PcmAudio:
    """Copy the ``[start_s, end_s)`` range of every channel into a new buffer."""

    start_idx = int(round(start_s * audio.sample_rate))
    length = int(round((end_s - start_s) * audio.sample_rate))
    if start_idx < 0:
        raise SliceRangeError(f"Slice start {start_s:.6f}s is before the buffer start")
    if length <= 0:
        raise SliceRangeError("Slice end must be greater than start")
    if start_idx + length > audio.num_frames:
        raise SliceRangeError(
            f"Slice [{start_s:.6f}s, {end_s:.6f}s) exceeds buffer of {audio.duration_s:.6f}s"
        )
    return PcmAudio(
        channels=audio.channels[:, start_idx : start_idx + length].copy(),
        sample_rate=audio.sample_rate,
    )


def clamp_segment(segment: HitSegment, duration_s: float) -> HitSegment:
    """Pull a segment's end back inside a buffer of ``duration_s`` seconds."""
    if segment.end <= duration_s:
        return segment
    return HitSegment(start=segment.start, end=duration_s, amplitude=segment.amplitude)
