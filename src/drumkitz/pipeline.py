from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from drumkitz.config import DetectorConfig, load_detector_config
from drumkitz.detection import HitSegment, detect_hits
from drumkitz.export import export_hits, write_sample_archive
from drumkitz.ingest import describe_audio, load_audio
from drumkitz.utils import get_logger

logger = get_logger(__name__)

MANIFEST_NAME = "hits.json"


@dataclass
class PipelineConfig:
    threshold: Optional[float] = None
    config_path: Optional[Path] = None

    def resolve_detector_config(self) -> DetectorConfig:
        config = load_detector_config(self.config_path) if self.config_path else DetectorConfig()
        if self.threshold is not None:
            config.threshold = self.threshold
        return config


@dataclass
class PipelineResult:
    segments: List[HitSegment] = field(default_factory=list)
    output_dir: Path = Path("out")
    clip_paths: List[Path] = field(default_factory=list)
    archive_path: Optional[Path] = None
    manifest_path: Optional[Path] = None


class HitExtractionPipeline:
    def __init__(self, config: PipelineConfig) -> None:
        self.config = config
        self.detector_config = config.resolve_detector_config()
        logger.debug(
            "Initialized pipeline", extra={"threshold": self.detector_config.threshold}
        )

    def run(self, audio_path: Path, output_dir: Path, archive: bool = True) -> PipelineResult:
        audio = load_audio(audio_path)
        metadata = describe_audio(audio_path, audio)
        segments = detect_hits(
            audio, self.detector_config.threshold, self.detector_config.params
        )

        output_dir.mkdir(parents=True, exist_ok=True)
        clip_paths = export_hits(audio, segments, output_dir / "clips")
        archive_path = None
        if archive:
            archive_path = write_sample_archive(
                audio,
                segments,
                output_dir / f"{self.detector_config.archive_folder}.zip",
                folder=self.detector_config.archive_folder,
            )

        manifest_path = output_dir / MANIFEST_NAME
        manifest_path.write_text(
            json.dumps(
                {
                    "audio": str(metadata.source_path),
                    "sample_rate": metadata.sample_rate,
                    "channels": metadata.channels,
                    "duration_s": metadata.duration_s,
                    "threshold": self.detector_config.threshold,
                    "segments": [segment.to_dict() for segment in segments],
                },
                indent=2,
            )
        )
        logger.info(
            "Pipeline executed",
            extra={"audio": str(audio_path), "hits": len(segments), "out": str(manifest_path)},
        )
        return PipelineResult(
            segments=segments,
            output_dir=output_dir,
            clip_paths=clip_paths,
            archive_path=archive_path,
            manifest_path=manifest_path,
        )
