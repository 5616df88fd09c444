"""Onset detection functions - streaming engine, windows, FFT adapter, pipeline."""

from onset_detection.config import DetectionConfig
from onset_detection.detection import OnsetDetectionFunction, compute_detection_function
from onset_detection.errors import (
    ConfigurationError,
    EngineStateError,
    InputSizeError,
    OnsetDetectionError,
    TransformResourceError,
)
from onset_detection.types import DetectionFunctionType, WindowType

__all__ = [
    "ConfigurationError",
    "DetectionConfig",
    "DetectionFunctionType",
    "EngineStateError",
    "InputSizeError",
    "OnsetDetectionError",
    "OnsetDetectionFunction",
    "TransformResourceError",
    "WindowType",
    "compute_detection_function",
]
