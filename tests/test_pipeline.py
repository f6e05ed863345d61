from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest

from drumkitz.pipeline import HitExtractionPipeline, PipelineConfig


def test_pipeline_config_threshold_override(tmp_path: Path) -> None:
    path = tmp_path / "kit.yaml"
    path.write_text("threshold: 0.3\n")

    assert PipelineConfig(config_path=path).resolve_detector_config().threshold == 0.3
    assert PipelineConfig(threshold=0.05, config_path=path).resolve_detector_config().threshold == 0.05
    assert PipelineConfig().resolve_detector_config().threshold == pytest.approx(0.1)


def test_pipeline_writes_clips_archive_and_manifest(tmp_path: Path, drum_loop_wav: Path) -> None:
    pipeline = HitExtractionPipeline(PipelineConfig(threshold=0.1))

    result = pipeline.run(audio_path=drum_loop_wav, output_dir=tmp_path / "out")

    assert len(result.segments) == 3
    assert [path.name for path in result.clip_paths] == [
        "sample_001.wav",
        "sample_002.wav",
        "sample_003.wav",
    ]
    assert result.archive_path is not None
    with zipfile.ZipFile(result.archive_path) as archive:
        assert len(archive.namelist()) == 3

    manifest = json.loads(result.manifest_path.read_text())
    assert manifest["sample_rate"] == 48_000
    assert manifest["channels"] == 2
    assert manifest["threshold"] == 0.1
    assert [item["start"] for item in manifest["segments"]] == [
        segment.start for segment in result.segments
    ]


def test_pipeline_without_archive(tmp_path: Path, drum_loop_wav: Path) -> None:
    pipeline = HitExtractionPipeline(PipelineConfig(threshold=0.6))

    result = pipeline.run(audio_path=drum_loop_wav, output_dir=tmp_path / "out", archive=False)

    assert len(result.segments) == 1
    assert result.archive_path is None
    assert not (tmp_path / "out" / "drum_samples.zip").exists()
