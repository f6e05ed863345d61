from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, List, Optional

import yaml

from drumkitz.detection import DEFAULT_THRESHOLD, DetectionParams
from drumkitz.export import DEFAULT_ARCHIVE_FOLDER

THRESHOLD_MIN = 0.001
THRESHOLD_MAX = 0.5


@dataclass
class DetectorConfig:
    threshold: float = DEFAULT_THRESHOLD
    params: DetectionParams = field(default_factory=DetectionParams)
    archive_folder: str = DEFAULT_ARCHIVE_FOLDER


def load_detector_config(path: Optional[Path]) -> DetectorConfig:
    data = yaml.safe_load(path.read_text()) if path and path.exists() else {}
    if not isinstance(data, dict):
        data = {}
    return DetectorConfig(
        threshold=_as_float(data.get("threshold"), DEFAULT_THRESHOLD),
        params=_detection_params(data.get("detection") or {}),
        archive_folder=str(data.get("archive_folder") or DEFAULT_ARCHIVE_FOLDER),
    )


def _detection_params(section: Any) -> DetectionParams:
    if not isinstance(section, dict):
        section = {}
    defaults = DetectionParams()
    values = {
        item.name: _as_float(section.get(item.name), getattr(defaults, item.name))
        for item in fields(DetectionParams)
    }
    return DetectionParams(**values)


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value) if value is not None else default
    except (TypeError, ValueError):
        return default


def default_sweep_thresholds(steps: int = 10) -> List[float]:
    """Evenly spaced thresholds covering the slider range."""
    if steps < 2:
        raise ValueError("steps must be at least 2")
    span = THRESHOLD_MAX - THRESHOLD_MIN
    return [round(THRESHOLD_MIN + span * idx / (steps - 1), 6) for idx in range(steps)]
