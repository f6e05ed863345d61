from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import soundfile as sf

from drumkitz.audio import PcmAudio
from drumkitz.errors import DecodeError
from drumkitz.utils import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = (".wav", ".mp3")


@dataclass
class AudioMetadata:
    """Basic details about the ingested audio asset."""

    source_path: Path
    duration_s: float
    sample_rate: int
    channels: int


def decode_audio(data: bytes) -> PcmAudio:
    """Decode an audio container held in memory into float PCM samples."""

    if not data:
        raise DecodeError("Audio data is empty")
    try:
        frames, sample_rate = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
    except (RuntimeError, TypeError) as exc:
        raise DecodeError(f"Unsupported or corrupt audio: {exc}") from exc
    return PcmAudio.from_frames(np.asarray(frames), sample_rate)


def load_audio(source_path: Path) -> PcmAudio:
    source_path = source_path.expanduser().resolve()
    if not source_path.exists():
        raise FileNotFoundError(f"Audio file not found: {source_path}")
    if source_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise DecodeError(
            f"Unsupported audio type {source_path.suffix!r}, expected one of {SUPPORTED_EXTENSIONS}"
        )

    audio = decode_audio(source_path.read_bytes())
    logger.info(
        "Decoded audio",
        extra={
            "audio": str(source_path),
            "sample_rate": audio.sample_rate,
            "channels": audio.num_channels,
            "frames": audio.num_frames,
        },
    )
    return audio


def describe_audio(source_path: Path, audio: PcmAudio) -> AudioMetadata:
    return AudioMetadata(
        source_path=source_path.expanduser().resolve(),
        duration_s=audio.duration_s,
        sample_rate=audio.sample_rate,
        channels=audio.num_channels,
    )
