from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import List, Sequence

from drumkitz.audio import PcmAudio
from drumkitz.clipper import clamp_segment, encode_pcm_audio, slice_audio
from drumkitz.detection import HitSegment
from drumkitz.utils import get_logger

logger = get_logger(__name__)

DEFAULT_ARCHIVE_FOLDER = "drum_samples"


def export_hits(
    audio: PcmAudio, segments: Sequence[HitSegment], out_dir: Path
) -> List[Path]:
    out_dir = out_dir.expanduser().resolve()
    out_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for idx, payload in enumerate(_encode_hits(audio, segments), start=1):
        output_path = out_dir / f"sample_{idx:03}.wav"
        output_path.write_bytes(payload)
        written.append(output_path)
    logger.info("Exported hits", extra={"count": len(written), "out": str(out_dir)})
    return written


def build_sample_archive(
    audio: PcmAudio,
    segments: Sequence[HitSegment],
    folder: str = DEFAULT_ARCHIVE_FOLDER,
) -> bytes:
    """Zip every hit as ``<folder>/sample_<n>.wav`` with 1-based numbering."""

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for idx, payload in enumerate(_encode_hits(audio, segments), start=1):
            archive.writestr(f"{folder}/sample_{idx}.wav", payload)
    return buffer.getvalue()


def write_sample_archive(
    audio: PcmAudio,
    segments: Sequence[HitSegment],
    archive_path: Path,
    folder: str = DEFAULT_ARCHIVE_FOLDER,
) -> Path:
    archive_path = archive_path.expanduser().resolve()
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    archive_path.write_bytes(build_sample_archive(audio, segments, folder=folder))
    logger.info(
        "Sample archive written",
        extra={"count": len(segments), "archive": str(archive_path)},
    )
    return archive_path


def _encode_hits(audio: PcmAudio, segments: Sequence[HitSegment]) -> List[bytes]:
    payloads: List[bytes] = []
    for segment in segments:
        clamped = clamp_segment(segment, audio.duration_s)
        clip = slice_audio(audio, clamped.start, clamped.end)
        payloads.append(encode_pcm_audio(clip))
    return payloads
