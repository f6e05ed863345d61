from .settings import (
    THRESHOLD_MAX,
    THRESHOLD_MIN,
    DetectorConfig,
    default_sweep_thresholds,
    load_detector_config,
)

__all__ = [
    "THRESHOLD_MAX",
    "THRESHOLD_MIN",
    "DetectorConfig",
    "default_sweep_thresholds",
    "load_detector_config",
]
