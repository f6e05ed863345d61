from __future__ import annotations

from pathlib import Path

import pytest

from drumkitz.config import (
    THRESHOLD_MAX,
    THRESHOLD_MIN,
    DetectorConfig,
    default_sweep_thresholds,
    load_detector_config,
)
from drumkitz.detection import DetectionParams


def test_load_detector_config_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "kit.yaml"
    path.write_text(
        "threshold: 0.2\n"
        "archive_folder: snares\n"
        "detection:\n"
        "  max_segment_s: 0.3\n"
        "  pre_peak_buffer_s: 0.01\n"
    )

    config = load_detector_config(path)

    assert config.threshold == pytest.approx(0.2)
    assert config.archive_folder == "snares"
    assert config.params.max_segment_s == pytest.approx(0.3)
    assert config.params.pre_peak_buffer_s == pytest.approx(0.01)
    assert config.params.min_segment_s == DetectionParams().min_segment_s


def test_load_detector_config_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("threshold: loud\ndetection:\n  rms_window_s: [1, 2]\n")

    config = load_detector_config(path)

    assert config.threshold == DetectorConfig().threshold
    assert config.params == DetectionParams()


def test_load_detector_config_missing_or_empty(tmp_path: Path) -> None:
    empty = tmp_path / "empty.yaml"
    empty.write_text("")

    assert load_detector_config(tmp_path / "missing.yaml") == DetectorConfig()
    assert load_detector_config(empty) == DetectorConfig()
    assert load_detector_config(None) == DetectorConfig()


def test_default_sweep_thresholds_span_slider_range() -> None:
    grid = default_sweep_thresholds(5)

    assert grid[0] == pytest.approx(THRESHOLD_MIN)
    assert grid[-1] == pytest.approx(THRESHOLD_MAX)
    assert grid == sorted(grid)
    with pytest.raises(ValueError):
        default_sweep_thresholds(1)
